# geodemos

Small, self-contained geometry and physics algorithms for 3D graphics work,
built on NumPy.

## What is in the package

- **Progressive mesh polygon reduction** (`geodemos.progmesh`):
  `progressive_mesh(vertices, triangles)` reduces a triangle mesh all the way
  down to nothing by repeatedly collapsing the cheapest edge. It returns
  `(collapse_map, permutation)`: `permutation[i]` is the new position of
  original vertex `i`, and after reordering, `collapse_map[j]` is the vertex
  that vertex `j` collapses onto. `edge_collapse_cost` gives the cost of one
  collapse: the edge length weighted by a curvature term, so small and
  coplanar regions go first.
- **Level of detail** (`geodemos.lod`): `permute_vertices` reorders a mesh by
  the permutation and `map_vertex` follows the collapse chain for a vertex
  beyond a vertex limit. `LodModel(vertices, triangles)` reduces a mesh once;
  `render_triangles(render_num, lodbase, morph)` gives the surviving triangles
  at a vertex count, each as `(corners, normal)`, optionally blended towards a
  coarser level, and `status(...)` gives a line with the polygon and vertex
  counts. `LodAnimator(vertex_count).advance(dt)` walks a looping 50-second
  keyframe schedule (`Keyframe`) and returns `(render_num, morph)`.
  `FrameClock.tick(now)` returns the time step and a running frame rate.
- **Quaternions and poses** (`geodemos.quat`): `qmul`, `qconj`, `qrot` and
  `quat_from_axis_angle` work on xyzw quaternions. `Pose(position,
  orientation)` is a rigid transform with `transform(point)`, `inverse()`, and
  `*` to compose with another pose or to transform a point.
- **Paraboloid fitting** (`geodemos.ploidfit`): `paraboloid_fit(points)` fits
  `z = h0·x² + h1·y² + h2·x·y + h3` by least squares and returns `h`
  (it raises `ValueError` when the points do not determine one);
  `random_parabolic_cloud(rng, extent)` makes a jittered 5×5 grid on a random
  paraboloid at a random pose; `curvature_axes(h)` returns the angle, the two
  principal directions and their curvatures.
- **Cloth simulation** (`geodemos.cloth`): `ConstraintNetwork(width, height,
  size, settings)` holds four square cloth sections with structural, shear and
  bending distance constraints. `simulate()` applies gravity and wind drag,
  runs the constraint solver, keeps points inside the room given by
  `ClothSettings`, and updates velocities, bounding boxes and normals. Points
  are read and written with `point`/`set_point` by flat index, and
  `set_inverse_mass(index, 0)` pins a point. `vertices()` gives render
  positions and texture coordinates matching the `triangles` attribute.
- **JSON values** (`geodemos.jsonvalue`, `geodemos.jsonconvert`): `JsonValue`
  keeps numbers in their exact text form; `parse` and `parse_file` read JSON
  strictly and raise `JsonParseError` on bad input; `is_json_number` checks
  number syntax. `dumps` and `dumps_tabbed` print values, and `to_json` /
  `from_json` convert to and from plain Python objects and dataclasses.

## Reducing a mesh

```python
from geodemos.progmesh import progressive_mesh
from geodemos.lod import permute_vertices, map_vertex

vertices = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (1.0, 1.0, 0.1)]
triangles = [(0, 1, 2), (1, 3, 2)]
collapse_map, permutation = progressive_mesh(vertices, triangles)
ordered, remapped = permute_vertices(vertices, triangles, permutation)
```

Drawing with the first *n* reordered vertices gives the *n*-vertex version of
the model; `map_vertex(collapse_map, index, n)` says where a vertex beyond the
limit ends up.

## Simulating cloth

```python
from geodemos.cloth import ConstraintNetwork

cloth = ConstraintNetwork(8, 8, 2.0)
cloth.set_inverse_mass(0, 0.0)
for _ in range(10):
    cloth.simulate()
positions, texcoords = cloth.vertices()
```

## Parsing JSON

```python
from geodemos.jsonvalue import parse, is_json_number
from geodemos.jsonconvert import dumps

doc = parse('{"name": "bunny", "sizes": [1, 2.5, -3e2]}')
print(doc["name"].string(""))   # bunny
print(is_json_number("-3e2"))   # True
print(dumps(doc))               # {"name":"bunny","sizes":[1,2.5,-3e2]}
```

Looking up a missing key or an index out of range gives a null value rather
than an error.

## What the package does not do

The package computes geometry only. It opens no window and draws nothing:
triangles, poses and vertex arrays are returned for you to render yourself.
It has no command-line program. It does not interpolate between poses, and
the cloth module simulates one network at a time; setting up a scene of many
cloth pieces and moving the wind over time (`ConstraintNetwork.wind`) is left
to the caller.

## Testing

The test suite uses pytest and is declared under the `test` extra.