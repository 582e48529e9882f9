import os
from typing import Optional


def resolve_data_file(filename: str) -> Optional[str]:
    """Resolve a config/data file path robustly across local dev and container (/mount/src) layouts.

    Strategy:
    1. Absolute or cwd-relative path as given.
    2. Try project-root relative (data/filename) based on this file location.
    3. Try cwd + data/filename (in case working dir is project root).
    4. Try /mount/src/data/filename (Streamlit ephemeral container pattern).
    Returns first existing path or None.
    """
    if not filename:
        return None
    candidates = [filename]
    base_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
    candidates.append(os.path.join(base_dir, 'data', filename))
    candidates.append(os.path.join(os.getcwd(), 'data', filename))
    candidates.append(os.path.join('/mount/src/data', filename))
    for p in candidates:
        if os.path.isfile(p):
            return p
    return None
