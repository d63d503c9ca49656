"""
Core Package

Data models and small utilities with no dependency on the packer or
bundle layers.
"""
