"""
Terminal client for local shrinking-deck matches
"""
