"""
Double round-robin league simulator: fixtures, results, table, title odds.
"""
