import pathlib

#FAT32 won't have any of these, and USB loaders want FAT32
_fat32_replacements = (
	(': ', ' - '),
	(':', '-'),
	('/', '-'),
	('\\', '_'),
	('*', '_'),
	('<', '_'),
	('>', '_'),
	('|', '_'),
	('"', '\''),
	('?', ''),
)

_max_name_length = 200

def read_file(path: pathlib.Path, seek_to: int=0, amount: int=-1) -> bytes:
	"""Reads a certain amount from an ordinary file from a certain position, or the whole thing if amount is negative"""
	with path.open('rb') as f:
		f.seek(seek_to)
		if amount < 0:
			return f.read()

		return f.read(amount)

def read_header_and_size(path: pathlib.Path, amount: int) -> tuple[bytes, int]:
	"""Reads the first amount bytes of path, and also how big the whole file is while we have it open"""
	with path.open('rb') as f:
		header = f.read(amount)
		size = f.seek(0, 2)
	return header, size

def sanitize_name(name: str) -> str:
	"""Makes an internal game title safe to use as a folder name on a FAT32 drive"""
	for bad, replacement in _fat32_replacements:
		name = name.replace(bad, replacement)
	name = ''.join(c if c.isprintable() else ' ' for c in name)
	#Windows won't let a name end in a dot or space
	name = name.strip().rstrip(' .')
	name = name[:_max_name_length].rstrip(' .')
	return name or 'Unknown'
