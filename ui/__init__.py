"""
Menu and widgets.
"""
