"""
Module: weights.text.__init__
"""
