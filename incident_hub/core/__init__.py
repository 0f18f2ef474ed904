"""
Core configuration, logging, errors and request controls.
"""
