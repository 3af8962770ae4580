"""
HR Modules - application features built on the HR reporting kernel.
"""
