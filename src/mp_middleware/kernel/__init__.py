"""Kernel — errors and value types shared by every other layer."""
