"""
Only the root tests directory is a regular package. Test directories below it are namespace
packages, so every test module needs a unique basename.
"""
