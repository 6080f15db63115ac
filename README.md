# bmpkit

A small toolkit for working with uncompressed BMP images.

- **8-bit (grayscale, paletted) images** (`bmpkit.bmp8`): load, save, show
  information, invert (negative), change brightness, apply a binary threshold
  and run 3×3 convolution filters (box blur, gaussian blur, outline, emboss,
  sharpen).
- **24-bit colour images** (`bmpkit.bmp24`): read and write the 14-byte file
  header and 40-byte information header, and hold the pixels as rows of
  `Pixel` values with row 0 at the top.
- **Viewing** (`bmpkit.utils`): open a file in the system's default viewer.

No third-party libraries are needed.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Interactive editor

```
bmpkit [IMAGE] [-o OUTPUT]
```

`IMAGE` is the path of an 8-bit BMP image; if it is left out, the command asks
for it. If the image cannot be loaded the command prints an error and exits
with status 1. It then shows a menu (its prompts are in French):

```
1. Show image information
2. Apply a negative filter
3. Change brightness
4. Apply a threshold
5. Apply a convolution filter
6. Save the image
7. Open the image
0. Quit
```

Options 2 to 5 change the image in memory and save it straight away to the
working copy, `OUTPUT` (by default `images/image_modifiee.bmp`). Option 6
saves to a path you type, and option 7 opens the working copy in your image
viewer. The menu ends on `0` or at the end of input.

When choosing a convolution filter you may type its number (`3`), its name
(`outline`) or both as listed (`3.outline`); anything else is asked again.

## Library use

8-bit images:

```python
from bmpkit.bmp8 import FilterType, get_kernel, load_image, parse_filter_choice

image = load_image("images/lena_gray.bmp")
print(image.info())         # width, height, colour depth and data size

image.negative()
image.brightness(40)        # clamped to 0..255
image.threshold(128)        # >= 128 becomes white, the rest black
image.apply_filter(get_kernel(FilterType.SHARPEN))
image.apply_filter(get_kernel(parse_filter_choice("1.box_blur")))
image.save("images/out.bmp")
```

`apply_filter` takes a 1×1 or 3×3 kernel (anything else raises `ValueError`)
and leaves the border pixels unchanged. `choose_filter(stdin, stdout)` asks
for a filter interactively.

An unreadable, truncated or unwritable file raises `Bmp8Error`.

24-bit images:

```python
from bmpkit.bmp24 import Pixel, load_image, new_image

picture = load_image("images/flowers_color.bmp")
print(picture.width, picture.height, picture.info.bits)
picture.save("images/copy.bmp")

blank = new_image(4, 3)               # a 4×3 grid of black pixels, 24 bits
blank.data[0][0] = Pixel(255, 0, 0)   # top-left pixel red
blank.save("images/blank.bmp")
```

`load_image` accepts only files with the `BM` signature and 24 bits per pixel;
bottom-up and top-down row orders are both read, and rows are padded to four
bytes on saving. Errors raise `Bmp24Error`. `parse_header`, `parse_info` and
the `to_bytes` methods of `BmpHeader` and `BmpInfo` give direct access to the
header fields.

Opening a file in the default viewer:

```python
from bmpkit.utils import open_command, open_image_file

open_command("out.bmp", "linux")      # ['xdg-open', 'out.bmp']
open_image_file("images/out.bmp")     # False on an unsupported platform
```

## What it does not do

- There are no editing operations for 24-bit images: they can only be
  created, loaded and saved. The interactive editor works on 8-bit images
  only.
- Compressed BMP files and other pixel depths are not supported.