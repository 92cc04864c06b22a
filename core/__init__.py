"""core/ -- Kernel modules (configuration). Imports nothing from the other packages."""
