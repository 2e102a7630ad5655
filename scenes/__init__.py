"""
Scenes driven by the main loop.
"""
