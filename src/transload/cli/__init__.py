"""
Command Line Interface for transload.
"""
