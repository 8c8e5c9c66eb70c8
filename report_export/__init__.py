"""
Report export service: renders business report JSON to PDF and stores it in Supabase
"""

__version__ = "0.1.0"
