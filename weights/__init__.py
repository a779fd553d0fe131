"""
Module: weights.__init__
"""
