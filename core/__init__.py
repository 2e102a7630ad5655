"""
Puzzle core: pipes, stock, colour propagation, history and level files.
"""
