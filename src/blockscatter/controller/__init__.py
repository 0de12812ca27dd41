"""
The CONTROLLER layer connects the pure scatter engine to the outside world:
surface triangulation through gmsh and the host-facing scatter commands.
"""
