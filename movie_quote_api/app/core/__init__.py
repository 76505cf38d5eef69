"""
Core infrastructure: configuration, logging, storage and exceptions.
"""
