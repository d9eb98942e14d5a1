"""
Basic example of using the printability package.

This example demonstrates:
1. Building a part with a thin wall and a floating piece
2. Running the printability analysis against its parameter catalog
3. Viewing the results
"""

import trimesh

from printability import ParameterDef, analyze, format_output

wall_thickness = 0.6
part_spacing = 4.0

base = trimesh.creation.box(extents=[30.0, 30.0, 5.0])
base.apply_translation([15.0, 15.0, 2.5])

fin = trimesh.creation.box(extents=[wall_thickness, 20.0, 15.0])
fin.apply_translation([5.0, 15.0, 5.0 + part_spacing + 7.5])

part = trimesh.util.concatenate([base, fin])

catalog = [
    ParameterDef(name="wallThickness", type="number", min=0.2, max=5.0, default=1.2, unit="mm"),
    ParameterDef(name="partSpacing", type="number", min=0.0, max=20.0, default=0.0, unit="mm"),
]
values = {"wallThickness": wall_thickness, "partSpacing": part_spacing}

print("Analyzing part...")

result = analyze(part, catalog, values)

print("\n=== Printability Results ===")
print(f"Status: {result.status.value}")
if result.issues is not None:
    print(f"Thin walls: {len(result.issues.thin_walls)}")
    print(f"Small features: {len(result.issues.small_features)}")
    if result.issues.disconnected is not None:
        print(f"Disconnected components: {result.issues.disconnected.component_count}")
for corr in result.parameter_correlations or []:
    s = corr.suggestion
    print(f"  {corr.parameter_name}: {s.action} to {s.target_value:.2f} ({s.confidence})")

print("\n=== JSON ===")
print(format_output(result))
