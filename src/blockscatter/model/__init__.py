"""
The MODEL layer contains pure data structures: triangles, meshes, items and
placement commands. It has NO knowledge of the host document.
"""
