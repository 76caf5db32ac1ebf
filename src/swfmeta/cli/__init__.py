"""
Command line interface for SwfMeta
"""
