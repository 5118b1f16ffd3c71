"""
Grid stages of a build: geometry, cell storage, coordinate mapping, path
rasterization, autotiling, reachability and activation.
"""
