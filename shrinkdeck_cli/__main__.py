"""
Allow running with python -m shrinkdeck_cli
"""

from .main import main

main()
