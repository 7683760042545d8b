"""
Core module - settings and error types shared by the whole app.
"""
