"""Route Modules: one file per concern, registered explicitly in main.py."""
