"""
Core data types: cell states, the dense grid container and puzzle definitions.
"""
