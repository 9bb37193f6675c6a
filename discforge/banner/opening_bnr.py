"""Getting the title and picture out of a Wii opening.bnr (or the 00000000.app of a channel, which is the same thing)

This is three formats stacked on top of each other: the IMET header with the titles in each language, a U8 archive after that, and banner.tpl inside that (well, technically it's inside banner.bin inside that, but we just look for the first .tpl we can find)
Everything after reading the file is best effort, if some part of it isn't there then the corresponding field is just left empty"""

import logging
from dataclasses import dataclass
from pathlib import Path

try:
	from PIL import Image
	have_pillow = True
except ModuleNotFoundError:
	have_pillow = False

from discforge.exceptions import ArchiveError, TextureError
from discforge.util.io_utils import read_file
from discforge.util.utils import decode_utf16be_lossy

from .tpl import decode_texture
from .u8 import U8_MAGIC, U8Archive, find_by_name_or_suffix

logger = logging.getLogger(__name__)

IMET_MAGIC = b'IMET'
#Japanese is at 0x40, English is 0x80, then German at 0xc0, which makes a decent enough subtitle I guess
_ENGLISH_TITLE_OFFSET = 0x80
_SUBTITLE_OFFSET = 0xc0
_TITLE_FIELD_SIZE = 64

UNKNOWN_TITLE = 'Unknown Title'
UNKNOWN_SUBTITLE = 'Unknown Publisher'

@dataclass
class DecodedBanner():
	"""Whatever could be pulled out of a banner. rgba_data and pcm_data belong to whoever called extract_banner, who should call free_banner_data when done with them"""
	game_title: str = UNKNOWN_TITLE
	game_subtitle: str = UNKNOWN_SUBTITLE
	width: int = 0
	height: int = 0
	rgba_data: bytearray | None = None
	"""width * height * 4 bytes of RGBA8, or None if there was no image we could decode"""
	pcm_data: bytearray | None = None
	"""Never actually filled in, sound.bin is not something we decode"""

	@property
	def rgba_size(self) -> int:
		return len(self.rgba_data) if self.rgba_data is not None else 0

	@property
	def pcm_size(self) -> int:
		return len(self.pcm_data) if self.pcm_data is not None else 0

def free_banner_data(banner: DecodedBanner) -> None:
	"""Releases the image/audio buffers from extract_banner; safe to call more than once"""
	banner.rgba_data = None
	banner.pcm_data = None
	banner.width = banner.height = 0

def _read_titles(data: bytes) -> tuple[str, str]:
	if data[:4] != IMET_MAGIC:
		return UNKNOWN_TITLE, UNKNOWN_SUBTITLE
	title = decode_utf16be_lossy(data, _ENGLISH_TITLE_OFFSET, _TITLE_FIELD_SIZE)
	subtitle = decode_utf16be_lossy(data, _SUBTITLE_OFFSET, _TITLE_FIELD_SIZE)
	return title, subtitle

def find_archive_offset(data: bytes) -> int | None:
	"""Where the first U8 magic is in data, searching from the start (it's usually 0x600 in opening.bnr)"""
	offset = data.find(U8_MAGIC)
	return offset if offset != -1 else None

def _add_banner_image(banner: DecodedBanner, data: bytes, name: str, tiled: bool) -> None:
	archive_offset = find_archive_offset(data)
	if archive_offset is None:
		logger.debug('No U8 archive in %s', name)
		return

	try:
		archive = U8Archive.open(data, archive_offset)
	except ArchiveError:
		logger.info('%s has an invalid U8 archive at %#x', name, archive_offset, exc_info=True)
		return

	entry = find_by_name_or_suffix(archive, 'banner.tpl', '.tpl')
	if not entry:
		logger.debug('No texture in %r in %s', archive, name)
		return

	try:
		header, rgba = decode_texture(archive.read(entry), tiled=tiled)
	except TextureError:
		logger.info('%s in %s could not be decoded', entry.name, name, exc_info=True)
		return
	if rgba is None:
		return
	banner.width = header.width
	banner.height = header.height
	banner.rgba_data = rgba

def extract_banner_from_bytes(data: bytes, name: str='banner', *, tiled: bool=False) -> DecodedBanner:
	"""extract_banner for something already in memory
	:param name: Just used for logging"""
	banner = DecodedBanner(*_read_titles(data))
	_add_banner_image(banner, data, name, tiled)
	return banner

def extract_banner(path: Path, *, tiled: bool=False) -> DecodedBanner:
	"""Reads the whole of path and gets the English title, subtitle and banner image out of it
	:param tiled: Decode the banner image in 8x8 tile order, see decode_cmpr
	:raises OSError: If path can't be read; nothing else about the file being weird is an error"""
	return extract_banner_from_bytes(read_file(path), str(path), tiled=tiled)

def banner_to_image(banner: DecodedBanner) -> 'Image.Image | None':
	"""Requires Pillow; None if there was no image in the banner"""
	if banner.rgba_data is None:
		return None
	return Image.frombytes('RGBA', (banner.width, banner.height), bytes(banner.rgba_data))

def save_banner_image(banner: DecodedBanner, path: Path) -> bool:
	"""Saves the banner image somewhere (format is decided by the extension), requires Pillow
	:return: False if there was no image to save"""
	image = banner_to_image(banner)
	if image is None:
		return False
	path.parent.mkdir(exist_ok=True, parents=True)
	image.save(path)
	return True
