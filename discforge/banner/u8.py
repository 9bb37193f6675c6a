"""U8 archives, which is what Nintendo packs banner.bin/icon.bin/sound.bin and the stuff inside those into

Header: magic (0x55AA382D), offset to the root node, size of header + nodes + string table, offset to data
Nodes are 12 bytes each: type (0 = file, 1 = directory), name offset (24 bits), then for files the data offset and size, and for directories the parent index and the index of the first node that isn't inside it
The root node is a directory whose "next" index is the amount of nodes there are"""

import logging
from collections.abc import Iterator, Sequence
from typing import NamedTuple

from discforge.exceptions import ArchiveError

logger = logging.getLogger(__name__)

U8_MAGIC = b'\x55\xaa\x38\x2d'
_NODE_SIZE = 12

class ArchiveEntry(NamedTuple):
	name: str
	is_directory: bool
	data_offset: int = 0
	"""Absolute offset into the buffer the archive is in (not relative to the archive), 0 for directories"""
	data_size: int = 0
	problem: str | None = None
	"""Why this node can't be used (name or data pointing outside the buffer), None if it's fine. Broken nodes are kept so the indices of everything else still line up"""

def _read_u32(buffer: bytes, offset: int) -> int:
	if offset < 0 or offset + 4 > len(buffer):
		raise ArchiveError(f'Tried to read past end of buffer at {offset:#x} (buffer is {len(buffer):#x} bytes)')
	return int.from_bytes(buffer[offset : offset + 4], 'big')

def _read_name(buffer: bytes, offset: int) -> str:
	if offset >= len(buffer):
		raise ArchiveError(f'Name offset {offset:#x} is past end of buffer')
	end = buffer.find(b'\0', offset)
	if end == -1:
		raise ArchiveError(f'Name at {offset:#x} is not null terminated')
	return buffer[offset:end].decode('ascii', errors='backslashreplace')

def _read_entry(host: bytes, start: int, node: bytes, string_table_offset: int) -> ArchiveEntry:
	name = _read_name(host, string_table_offset + int.from_bytes(node[1:4], 'big'))
	if node[0] == 1:
		#4:8 is the parent and 8:12 is where this directory ends, neither of which are byte ranges
		return ArchiveEntry(name, True)
	data_offset = start + int.from_bytes(node[4:8], 'big')
	data_size = int.from_bytes(node[8:12], 'big')
	if data_offset + data_size > len(host):
		return ArchiveEntry(name, False, problem=f'{name} is at {data_offset:#x} with size {data_size:#x}, which is past end of buffer ({len(host):#x})')
	return ArchiveEntry(name, False, data_offset, data_size)

class U8Archive():
	"""A U8 archive living somewhere inside a bigger buffer (such as opening.bnr, where it's after the IMET header)"""
	def __init__(self, host: bytes, start: int, entries: Sequence[ArchiveEntry], directory_ends: Sequence[int]) -> None:
		self.host = host
		self.start = start
		self.entries = entries
		"""Every node in the order they appear in the node table, including the root and broken ones"""
		self._directory_ends = directory_ends

	@classmethod
	def open(cls, host: bytes, start: int=0) -> 'U8Archive':
		"""Nodes with a bad name or data range don't stop the rest of the archive from being read, they just end up with problem set
		:raises ArchiveError: If the magic is wrong, or the header/node table points outside host"""
		if host[start : start + 4] != U8_MAGIC:
			raise ArchiveError(f'No U8 magic at {start:#x}, got {host[start : start + 4]!r}')
		root_offset = start + _read_u32(host, start + 4)
		node_count = _read_u32(host, root_offset + 8)
		if node_count == 0:
			raise ArchiveError('Root node says there are 0 nodes, but it is a node itself')
		string_table_offset = root_offset + node_count * _NODE_SIZE
		if string_table_offset > len(host):
			raise ArchiveError(f'{node_count} nodes at {root_offset:#x} would go past end of buffer')

		entries = []
		directory_ends = []
		for i in range(node_count):
			node_offset = root_offset + i * _NODE_SIZE
			node = host[node_offset : node_offset + _NODE_SIZE]
			try:
				entry = _read_entry(host, start, node, string_table_offset)
			except ArchiveError as ex:
				entry = ArchiveEntry('', node[0] == 1, problem=str(ex))
			if entry.problem:
				logger.info('Skipping node %d of U8 archive at %#x: %s', i, start, entry.problem)
			entries.append(entry)
			directory_ends.append(int.from_bytes(node[8:12], 'big') if entry.is_directory else 0)
		return cls(host, start, entries, directory_ends)

	def files(self) -> Iterator[ArchiveEntry]:
		"""Files that can actually be read"""
		return (entry for entry in self.entries if not entry.is_directory and not entry.problem)

	def read(self, entry: ArchiveEntry) -> bytes:
		if entry.is_directory:
			raise ArchiveError(f'{entry.name} is a directory')
		if entry.problem:
			raise ArchiveError(entry.problem)
		return self.host[entry.data_offset : entry.data_offset + entry.data_size]

	def paths(self) -> Iterator[tuple[str, ArchiveEntry]]:
		"""Yields (full path with / separators, entry) for each readable file, working out the folder structure from where each directory ends"""
		folders: list[tuple[str, int]] = []
		for i, entry in enumerate(self.entries):
			if i == 0:
				#Root, which has an empty name anyway
				continue
			while folders and i >= folders[-1][1]:
				folders.pop()
			if entry.is_directory:
				folders.append((entry.name, self._directory_ends[i]))
			elif not entry.problem:
				yield '/'.join([folder for folder, _ in folders] + [entry.name]), entry

	def __repr__(self) -> str:
		return f'<U8Archive at {self.start:#x} with {len(self.entries)} nodes>'

def find_by_name_or_suffix(archive: U8Archive, exact_name: str, suffix: str) -> ArchiveEntry | None:
	"""First file (in node table order) that is called exact_name or has suffix anywhere in its name, directories are never returned"""
	for entry in archive.files():
		if entry.name == exact_name or suffix in entry.name:
			logger.debug('Found %s in %r', entry.name, archive)
			return entry
	return None
