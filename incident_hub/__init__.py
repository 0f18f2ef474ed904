"""
Incident Hub: IT incident tracking with cached AI root-cause analysis.
"""

__version__ = "1.0.0"
