"""View modules for manual routing.

The app has exactly two views, selected by `RootController.view` and reachable
only through in-app buttons (no URL routes). Each module exposes
`view(controller)` and is registered in `PAGE_REGISTRY` inside `app.py`.
"""
