"""Collection export layer.

This package serializes assembled collections back into the import
file formats so exported files can be re-imported.
"""
