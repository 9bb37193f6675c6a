import logging
from collections.abc import Iterator
from pathlib import Path

from discforge.common_types import DiscFormat, Platform
from discforge.game_identity import GameIdentity
from discforge.util.io_utils import read_header_and_size

from .signatures import signatures

logger = logging.getLogger(__name__)

HEADER_SIZE = 512
"""How much of a file identify_from_file reads, which is enough for every signature"""
MINIMUM_HEADER_SIZE = 64

_extension_formats = {
	'iso': 'ISO',
	'wbfs': 'WBFS',
	'rvz': 'RVZ',
	'gcm': 'GCM',
	'ciso': 'CISO',
	'nkit': 'NKIT',
}

def identify_from_header(header: bytes) -> GameIdentity | None:
	"""Works out what platform/format header belongs to, by checking each signature in order; the first one that matches wins
	:return: None if header is too short to be sure of anything or nothing matched"""
	if len(header) < MINIMUM_HEADER_SIZE:
		return None

	for signature in signatures:
		if signature.matches(header):
			logger.debug('Header matched %s signature', signature.name)
			return signature.identify(header)
	return None

def read_file_header(path: Path, header_size: int=HEADER_SIZE) -> tuple[bytes, int]:
	""":return: (first header_size bytes of path, size of the whole file)
	:raises OSError: If path can't be read"""
	return read_header_and_size(path, header_size)

def identify_from_file(path: Path, header_size: int=HEADER_SIZE) -> GameIdentity | None:
	"""Reads the start of path and identifies that; file_size gets filled in on the result
	:raises OSError: If path can't be read, which is a different thing from not being able to identify it"""
	header, size = read_file_header(path, header_size)
	identity = identify_from_header(header)
	if identity:
		identity.file_size = size
	else:
		logger.debug('Could not identify %s (%d bytes)', path, size)
	return identity

def identify_wiiu_folder(folder: Path) -> GameIdentity | None:
	"""Detects an unpacked Wii U title, which has code/content/meta folders. Only code is checked for"""
	for separator in ('/', '\\'):
		if Path(f'{folder}{separator}code').exists():
			return GameIdentity(Platform.WiiU, DiscFormat.Folder, game_title='Wii U Game')
	return None

def scan_folder(folder: Path, recursive: bool=False, header_size: int=HEADER_SIZE) -> Iterator[tuple[Path, GameIdentity]]:
	"""Identifies every file in folder (and subfolders if recursive), yielding the ones that could be identified
	Files that can't be read are logged and skipped, so one bad file doesn't stop the whole thing"""
	paths = folder.rglob('*') if recursive else folder.iterdir()
	for path in paths:
		if not path.is_file():
			continue
		try:
			identity = identify_from_file(path, header_size)
		except OSError:
			logger.exception('Could not read %s', path)
			continue
		if identity:
			yield path, identity

def get_file_format(path: Path) -> str:
	"""Guesses the container format from the file extension alone, without looking inside
	:return: "ISO", "WBFS", "RVZ", "GCM", "CISO", "NKIT", or "Unknown" (including if path doesn't exist)"""
	if not path.exists():
		return 'Unknown'
	return _extension_formats.get(path.suffix.lower().removeprefix('.'), 'Unknown')
