"""
Module: weights.engine.__init__
"""
