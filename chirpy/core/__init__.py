"""
Core module - Constants and configuration
"""
