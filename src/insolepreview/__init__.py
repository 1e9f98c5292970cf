"""Parametric insole preview: outline, extrusion, relief and normals."""
