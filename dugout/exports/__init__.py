"""
File exports: CSV player lists, roster PDFs and the AFA roster form overlay.
"""
