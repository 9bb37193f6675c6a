"""TPL textures, and decoding CMPR (which is basically S3TC/DXT1 but big endian), as that is what banner.tpl tends to be
Other formats can be parsed out of the header but we don't bother decoding them"""

import logging
from collections.abc import Iterator, Sequence
from enum import IntEnum
from typing import NamedTuple

from discforge.exceptions import TextureError

logger = logging.getLogger(__name__)

TPL_MAGIC = b'\x00\x20\xaf\x30'

RGBA = tuple[int, int, int, int]

class TextureFormat(IntEnum):
	I4 = 0
	I8 = 1
	IA4 = 2
	IA8 = 3
	RGB565 = 4
	RGB5A3 = 5
	RGBA8 = 6
	C4 = 8
	C8 = 9
	C14X2 = 10
	CMPR = 14

class TextureImageHeader(NamedTuple):
	width: int
	height: int
	pixel_format: TextureFormat | int
	"""int if it's something we don't even know the name of"""
	pixel_data_offset: int
	"""Relative to the start of the TPL"""

def _read_int(texture: bytes, offset: int, size: int) -> int:
	if offset < 0 or offset + size > len(texture):
		raise TextureError(f'Tried to read past end of texture at {offset:#x} (texture is {len(texture):#x} bytes)')
	return int.from_bytes(texture[offset : offset + size], 'big')

def parse_tpl_header(texture: bytes) -> TextureImageHeader:
	"""Finds the first image in a TPL, any others are ignored
	:raises TextureError: If the magic is wrong, there are no images, or the header points outside texture"""
	magic = texture[:4]
	if magic != TPL_MAGIC:
		raise TextureError(f'Invalid TPL magic: {magic!r}')
	image_count = _read_int(texture, 4, 4)
	if not image_count:
		raise TextureError('TPL has no images')
	image_table_offset = _read_int(texture, 8, 4)
	#Each image table entry is (image header offset, palette header offset), we just want the first one's image
	image_header_offset = _read_int(texture, image_table_offset, 4)

	height = _read_int(texture, image_header_offset, 2)
	width = _read_int(texture, image_header_offset + 2, 2)
	if not width or not height:
		raise TextureError(f'Image has no pixels: {width}x{height}')
	pixel_format: TextureFormat | int = _read_int(texture, image_header_offset + 4, 4)
	try:
		pixel_format = TextureFormat(pixel_format)
	except ValueError:
		pass
	pixel_data_offset = _read_int(texture, image_header_offset + 8, 4)
	return TextureImageHeader(width, height, pixel_format, pixel_data_offset)

def _rgb565_to_rgba(colour: int) -> RGBA:
	red = colour >> 11
	green = (colour >> 5) & 0b11_1111
	blue = colour & 0b1_1111
	#Top bits get copied into the bottom so that 0b11111 ends up as 255 and not 248
	return ((red << 3) | (red >> 2), (green << 2) | (green >> 4), (blue << 3) | (blue >> 2), 255)

def _get_palette(c0: int, c1: int) -> Sequence[RGBA]:
	colour0 = _rgb565_to_rgba(c0)
	colour1 = _rgb565_to_rgba(c1)
	if c0 > c1:
		colour2 = tuple((2 * a + b) // 3 for a, b in zip(colour0[:3], colour1[:3])) + (255, )
		colour3 = tuple((a + 2 * b) // 3 for a, b in zip(colour0[:3], colour1[:3])) + (255, )
	else:
		colour2 = tuple((a + b) // 2 for a, b in zip(colour0[:3], colour1[:3])) + (255, )
		colour3 = (0, 0, 0, 0)
	return (colour0, colour1, colour2, colour3) #type: ignore[return-value]

def decode_cmpr_block(block: bytes) -> Sequence[RGBA]:
	"""Decodes one 8-byte CMPR block into the 16 pixels of its 4x4 area, left to right then top to bottom
	Layout: two big endian RGB565 colours, then 32 bits of 2-bit palette indices with the first pixel in the top bits"""
	if len(block) < 8:
		raise TextureError(f'CMPR block needs 8 bytes, got {len(block)}')
	c0 = int.from_bytes(block[0:2], 'big')
	c1 = int.from_bytes(block[2:4], 'big')
	bits = int.from_bytes(block[4:8], 'big')
	palette = _get_palette(c0, c1)
	return tuple(palette[(bits >> (30 - i * 2)) & 0b11] for i in range(16))

def _linear_block_positions(width: int, height: int) -> Iterator[tuple[int, int]]:
	for block_y in range(0, height, 4):
		for block_x in range(0, width, 4):
			yield block_x, block_y

def _tiled_block_positions(width: int, height: int) -> Iterator[tuple[int, int]]:
	#How the GPU actually wants it: 8x8 tiles, each of which is 2x2 4x4 blocks
	for tile_y in range(0, height, 8):
		for tile_x in range(0, width, 8):
			for sub_x, sub_y in ((0, 0), (4, 0), (0, 4), (4, 4)):
				yield tile_x + sub_x, tile_y + sub_y

def decode_cmpr(pixels: bytes, width: int, height: int, *, tiled: bool=False) -> bytearray:
	"""Decodes CMPR pixel data into a flat RGBA8 buffer of width * height * 4 bytes
	By default blocks are read as though they are just one 4x4 block after another in raster order, which is not quite how the hardware lays them out, so textures wider than 4 pixels may come out scrambled; tiled=True reads them in 8x8 tile order instead
	Pixels that would land outside the image are skipped, and if pixels runs out early, whatever is left stays transparent black"""
	if width % 4 or height % 4:
		raise TextureError(f'CMPR dimensions must be multiples of 4, got {width}x{height}')
	pixel_count = width * height
	rgba = bytearray(pixel_count * 4)
	positions = _tiled_block_positions(width, height) if tiled else _linear_block_positions(width, height)
	for block_index, (block_x, block_y) in enumerate(positions):
		block = pixels[block_index * 8 : block_index * 8 + 8]
		if len(block) < 8:
			logger.debug('CMPR data ran out after %d blocks', block_index)
			break
		for i, colour in enumerate(decode_cmpr_block(block)):
			y = block_y + i // 4
			x = block_x + i % 4
			if x >= width or y >= height:
				continue
			pixel = y * width + x
			rgba[pixel * 4 : pixel * 4 + 4] = bytes(colour)
	return rgba

def decode_texture(texture: bytes, *, tiled: bool=False) -> tuple[TextureImageHeader, bytearray | None]:
	"""Parses a TPL and decodes its first image, if it's in a format we can decode
	:return: (header, RGBA8 buffer or None if the format isn't CMPR)
	:raises TextureError: If the TPL is invalid"""
	header = parse_tpl_header(texture)
	if header.pixel_format != TextureFormat.CMPR:
		logger.debug('Not decoding texture with unsupported format %r', header.pixel_format)
		return header, None
	if header.pixel_data_offset > len(texture):
		raise TextureError(f'Pixel data offset {header.pixel_data_offset:#x} is past end of texture')
	return header, decode_cmpr(texture[header.pixel_data_offset:], header.width, header.height, tiled=tiled)
