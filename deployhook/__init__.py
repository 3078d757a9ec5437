"""
deployhook

GitHub webhook receiver that deploys tenant apps on push.
"""

__version__ = "0.1.0"
