"""
MD Compose - UI Package

GTK widgets for the editor window.
"""
