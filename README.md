# seamcarve

Shrink images in width by removing low-energy vertical "seams" rather than
scaling or cropping. Two carving strategies are included:

- **Sequential** (`seamcarve.sequential`): compute a gradient energy map,
  accumulate it row by row, trace the cheapest vertical seam back from the
  bottom row and remove it, one seam at a time. Energies can be raw integer
  sums (border pixels 10000) or normalised to 0–1 (border pixels 1.0).
- **Block-parallel** (`seamcarve.parallel_seams`, `seamcarve.parallel`): a
  greedy variant. The image is split into vertical blocks; inside each block
  many non-overlapping seams are grown from the top row, guided by a
  gradient-direction map, and the cheapest ones are removed in batches
  (50 per energy pass by default).

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## The text image format

The carving commands work on a plain text format: the first line holds
`width height`, followed by one `r g b` line per pixel in row-major order.
Two commands convert between PNG and this format:

```
seamcarve-png2txt [input.png [output.txt]]
seamcarve-txt2png [input.txt [output.png]]
```

Without arguments, `seamcarve-png2txt` reads `image.png` and writes
`image_rgb.txt`, and `seamcarve-txt2png` reads `outputImg.txt` and writes
`output.png`. Both print the image size and exit with status 1 on failure.

## Command-line use

Remove 100 vertical seams with the sequential carver:

```
seamcarve-sequential -f image_rgb.txt -s 100
```

Or with the block-parallel carver, using 4 blocks:

```
seamcarve-parallel -f image_rgb.txt -s 100 -n 4
```

Options:

| option | meaning                                                   |
|--------|-----------------------------------------------------------|
| `-f`   | input text image (required)                               |
| `-s`   | number of seams to remove (required)                      |
| `-n`   | number of blocks for `seamcarve-parallel`; only reported by `seamcarve-sequential` (default 1) |
| `-o`   | output text image (default `outputImg.txt`)               |
| `-d`   | `seamcarve-sequential` only: non-zero selects normalised energies |

When an option is given twice, the last one wins. Both commands print the
time spent in each stage. If `-f` or `-s` is missing, a usage message is
printed and the command exits with status 1. If `seamcarve-parallel` runs
out of seams before removing as many as asked, it prints
`Error! Not enough seams found` and writes the image as carved so far.

## Library use

```python
from seamcarve.textimage import read_text_image, write_text_image
from seamcarve.sequential import reduce_image

image = read_text_image("image_rgb.txt")          # (height, width, 3) uint8 array
carved, times = reduce_image(image, 50, normalised=False)
print(times)                                      # per-stage timings
write_text_image("outputImg.txt", carved)
```

The individual stages are available too:

- `seamcarve.sequential`: `calculate_energy`, `accumulate_energy`,
  `find_seam`, `remove_seam`, `reduce_image` and the `StageTimes` record.
- `seamcarve.parallel_seams`: `calculate_energy` (returns energy and
  direction maps), `find_seams` (returns seam paths, `SeamCandidate`
  records and the number of seams found).
- `seamcarve.parallel`: `remove_seams`, `draw_seams` (paints found seams
  red) and `reduce_image`, which accepts a `random.Random` for reproducible
  results.
- `seamcarve.textimage`: `read_text_image`, `write_text_image`,
  `png_to_text` and `text_to_png`.
- `seamcarve.options`: `option_string`, `option_int`, `option_float` and
  `usage` for `-flag value` style arguments.

## Graph structure

`seamcarve.graph.Graph` holds a directed graph for cut problems: nodes
added with `add_node`, paired arcs with `add_edge`, signed terminal
capacities with `add_tweights`, and accessors such as `arcs`, `arc_ends`,
`rcap`, `set_rcap`, `trcap` and `set_trcap`.

## What this package does not do

- `Graph` only stores the graph and its capacities; the package has no
  solver that computes a maximum flow or minimum cut on it, and no carver
  that finds seams by graph cuts.
- Only vertical seams are removed, so images shrink in width only; there is
  no horizontal seam removal and no enlarging.
- The carving commands read and write the text format only; use the
  conversion commands for PNG files.