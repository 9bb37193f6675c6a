"""Where an identified game should go on a USB loader / emulator drive. No I/O happens here, it's just string formatting"""

from collections.abc import Mapping

from discforge.common_types import Platform
from discforge.game_identity import GameIdentity
from discforge.util.io_utils import sanitize_name

_rom_folders: Mapping[Platform, tuple[str, str]] = {
	#Platform: (folder under roms, extension)
	Platform.NES: ('NES', 'nes'),
	Platform.SNES: ('SNES', 'sfc'),
	Platform.N64: ('N64', 'z64'),
	Platform.GameBoy: ('GB', 'gb'),
	Platform.GBC: ('GBC', 'gbc'),
	Platform.GBA: ('GBA', 'gba'),
	Platform.NDS: ('NDS', 'nds'),
	Platform.Genesis: ('Genesis', 'md'),
}

def get_organized_path(identity: GameIdentity, drive_root: str, *, sanitize: bool=False) -> str:
	"""Path that USB Loader GX/WiiFlow/Nintendont etc expect to find this game at, e.g. E:/wbfs/Wii Sports [RSPE01]/RSPE01.wbfs
	:param sanitize: Clean up the title with sanitize_name, as internal titles can have characters that filesystems won't like"""
	root = drive_root.rstrip('/\\')
	title = sanitize_name(identity.game_title) if sanitize else identity.game_title
	title_id = identity.title_id

	if identity.platform == Platform.Wii:
		return f'{root}/wbfs/{title} [{title_id}]/{title_id}.wbfs'
	if identity.platform == Platform.GameCube:
		#Nintendont layout
		return f'{root}/games/{title} [{title_id}]/game.iso'
	if identity.platform == Platform.WiiU:
		return f'{root}/wiiu/games/{title_id}/'
	if identity.platform in _rom_folders:
		folder, extension = _rom_folders[identity.platform]
		return f'{root}/roms/{folder}/{title}.{extension}'
	return f'{root}/roms/Unknown/{title}'
