"""
Scan-order indexing and run-definition checks for rows and columns.
"""
