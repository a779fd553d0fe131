"""
Module: weights.editor.__init__
"""
