"""
Integration tests running the command line tool end to end.
"""
