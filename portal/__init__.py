"""portal/ -- Dashboard data (metrics, feedback, activity, templates, plugins).

Layer rule: portal/ imports only stdlib. It does NOT import from api/ or auth/.
"""
