"""
Views Package.
"""
