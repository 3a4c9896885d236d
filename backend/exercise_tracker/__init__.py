"""
Exercise Tracker : inscription d'utilisateurs et suivi de leurs exercices
"""
__version__ = "1.0.0"
