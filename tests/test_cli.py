from pathlib import Path

from binary_builders import banner, cmpr_block, disc_header, tpl, u8_archive

from discforge.__main__ import main
from discforge.identify.signatures import WII_MAGIC


def _write_wii_iso(folder: Path) -> Path:
	path = folder / 'wii.iso'
	path.write_bytes(bytes(disc_header(b'RSPE01', b'Wii Sports', WII_MAGIC)))
	return path

def test_identify(tmp_path: Path, capsys):
	path = _write_wii_iso(tmp_path)
	unknown = tmp_path / 'unknown.bin'
	unknown.write_bytes(bytes(512))
	assert main(['identify', str(path), str(unknown)]) == 0
	out = capsys.readouterr().out
	assert 'Nintendo Wii (ISO): Wii Sports [RSPE01]' in out
	assert f'{unknown}: Unknown' in out

def test_identify_missing_file(tmp_path: Path):
	assert main(['identify', str(tmp_path / 'nope.iso')]) == 1

def test_identify_wiiu_folder(tmp_path: Path, capsys):
	(tmp_path / 'code').mkdir()
	assert main(['identify', str(tmp_path)]) == 0
	assert 'Nintendo Wii U (Folder): Wii U Game' in capsys.readouterr().out

def test_scan(tmp_path: Path, capsys):
	_write_wii_iso(tmp_path)
	assert main(['scan', str(tmp_path)]) == 0
	assert 'Wii Sports' in capsys.readouterr().out

def test_organize(tmp_path: Path, capsys):
	path = _write_wii_iso(tmp_path)
	assert main(['organize', str(path), '--drive-root', '/media/usb']) == 0
	assert '/media/usb/wbfs/Wii Sports [RSPE01]/RSPE01.wbfs' in capsys.readouterr().out

def test_organize_unknown(tmp_path: Path):
	path = tmp_path / 'unknown.bin'
	path.write_bytes(bytes(512))
	assert main(['organize', str(path), '--drive-root', '/media/usb']) == 1

def test_banner(tmp_path: Path, capsys):
	path = tmp_path / 'opening.bnr'
	archive = u8_archive([('file', 'banner.tpl', tpl(4, 4, cmpr_block(0xffff, 0, 0)))])
	path.write_bytes(banner('Test Game', 'Test Co', archive))
	assert main(['banner', str(path)]) == 0
	out = capsys.readouterr().out
	assert 'Title: Test Game' in out
	assert 'Subtitle: Test Co' in out
	assert 'Image: 4x4' in out
