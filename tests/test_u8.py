import pytest
from binary_builders import u8_archive

from discforge.banner.u8 import U8Archive, find_by_name_or_suffix
from discforge.exceptions import ArchiveError

_nested_nodes = [
	('dir', 'arc', 6),
	('dir', 'anim', 4),
	('file', 'banner_loop.brlan', b'animation'),
	('dir', 'timg', 6),
	('file', 'banner.tpl', b'texture!'),
	('file', 'readme.txt', b'hello'),
]

def test_open_at_start():
	archive = U8Archive.open(u8_archive(_nested_nodes))
	assert len(archive.entries) == 7
	assert archive.entries[0].is_directory
	assert [entry.name for entry in archive.files()] == ['banner_loop.brlan', 'banner.tpl', 'readme.txt']

def test_open_inside_bigger_buffer():
	host = bytes(0x600) + u8_archive(_nested_nodes)
	archive = U8Archive.open(host, 0x600)
	entry = find_by_name_or_suffix(archive, 'banner.tpl', '.tpl')
	assert entry is not None
	assert archive.read(entry) == b'texture!'
	#Offsets are relative to the host, not the archive
	assert entry.data_offset > 0x600

def test_paths():
	archive = U8Archive.open(u8_archive(_nested_nodes))
	assert [path for path, _ in archive.paths()] == [
		'arc/anim/banner_loop.brlan',
		'arc/timg/banner.tpl',
		'readme.txt',
	]

def test_find_by_suffix():
	archive = U8Archive.open(u8_archive([('file', 'icon.tpl', b'icon'), ('file', 'other.tpl', b'other')]))
	entry = find_by_name_or_suffix(archive, 'banner.tpl', '.tpl')
	assert entry is not None
	assert entry.name == 'icon.tpl'

def test_find_prefers_first_in_table_order():
	archive = U8Archive.open(u8_archive([('file', 'icon.tpl', b'icon'), ('file', 'banner.tpl', b'banner')]))
	entry = find_by_name_or_suffix(archive, 'banner.tpl', '.tpl')
	assert entry is not None
	assert entry.name == 'icon.tpl'

def test_find_never_returns_directory():
	archive = U8Archive.open(u8_archive([('dir', 'stuff.tpl', 2), ('file', 'readme.txt', b'hi')]))
	assert find_by_name_or_suffix(archive, 'banner.tpl', '.tpl') is None

def test_read_directory():
	archive = U8Archive.open(u8_archive(_nested_nodes))
	with pytest.raises(ArchiveError):
		archive.read(archive.entries[1])

def test_bad_magic():
	data = bytearray(u8_archive(_nested_nodes))
	data[0] = 0
	with pytest.raises(ArchiveError):
		U8Archive.open(bytes(data))

def test_zero_nodes():
	data = bytearray(u8_archive(_nested_nodes))
	data[0x28:0x2c] = bytes(4)
	with pytest.raises(ArchiveError):
		U8Archive.open(bytes(data))

def test_node_table_past_end():
	data = bytearray(u8_archive(_nested_nodes))
	data[0x28:0x2c] = (0x10000).to_bytes(4, 'big')
	with pytest.raises(ArchiveError):
		U8Archive.open(bytes(data))

def test_file_data_past_end():
	data = u8_archive([('file', 'banner.tpl', b'texture!')])
	#Chop off most of the file data (it's padded to 0x20)
	archive = U8Archive.open(data[:-0x1c])
	entry = archive.entries[1]
	assert entry.name == 'banner.tpl'
	assert entry.problem
	assert list(archive.files()) == []
	with pytest.raises(ArchiveError):
		archive.read(entry)

def test_file_size_past_end():
	data = bytearray(u8_archive([('file', 'banner.tpl', b'texture!')]))
	#Second node's size field
	data[0x20 + 12 + 8 : 0x20 + 12 + 12] = (0xffff_ffff).to_bytes(4, 'big')
	archive = U8Archive.open(bytes(data))
	assert archive.entries[1].problem
	assert find_by_name_or_suffix(archive, 'banner.tpl', '.tpl') is None

def test_broken_sibling_does_not_affect_other_files():
	data = bytearray(u8_archive([('file', 'banner.tpl', b'texture!'), ('file', 'sound.bin', b'bwoop')]))
	#Third node (sound.bin) gets a size that goes way past the end
	data[0x20 + 24 + 8 : 0x20 + 24 + 12] = (0xffff_ffff).to_bytes(4, 'big')
	archive = U8Archive.open(bytes(data))
	entry = find_by_name_or_suffix(archive, 'banner.tpl', '.tpl')
	assert entry is not None
	assert archive.read(entry) == b'texture!'
	assert [path for path, _ in archive.paths()] == ['banner.tpl']
	assert archive.entries[2].problem

def test_name_past_end():
	data = bytearray(u8_archive([('file', 'sound.bin', b'bwoop'), ('file', 'banner.tpl', b'texture!')]))
	#Second node's name offset (24 bits after the type byte)
	data[0x20 + 12 + 1 : 0x20 + 12 + 4] = (0xff_ffff).to_bytes(3, 'big')
	archive = U8Archive.open(bytes(data))
	assert archive.entries[1].name == ''
	assert archive.entries[1].problem
	assert [entry.name for entry in archive.files()] == ['banner.tpl']

def test_truncated_header():
	with pytest.raises(ArchiveError):
		U8Archive.open(b'\x55\xaa\x38\x2d\x00\x00')
