#Enums to be used between identify and everything that consumes what it says

from enum import Enum


class Platform(Enum):
	"""What a dump is for, as far as its header is concerned"""
	Unknown = 0
	Wii = 1
	GameCube = 2
	WiiU = 3
	NES = 4
	SNES = 5 #No universal header, so nothing detects this yet
	N64 = 6
	GameBoy = 7
	GBC = 8
	GBA = 9
	NDS = 10
	ThreeDS = 11
	PSP = 12
	PS1 = 13
	PS2 = 14
	Genesis = 15
	Dreamcast = 16

	@property
	def display_name(self) -> str:
		return _platform_display_names.get(self, 'Unknown Platform')

_platform_display_names = {
	Platform.Wii: 'Nintendo Wii',
	Platform.GameCube: 'Nintendo GameCube',
	Platform.WiiU: 'Nintendo Wii U',
	Platform.NES: 'Nintendo Entertainment System',
	Platform.SNES: 'Super Nintendo',
	Platform.N64: 'Nintendo 64',
	Platform.GameBoy: 'Game Boy',
	Platform.GBC: 'Game Boy Color',
	Platform.GBA: 'Game Boy Advance',
	Platform.NDS: 'Nintendo DS',
	Platform.ThreeDS: 'Nintendo 3DS',
	Platform.PSP: 'PlayStation Portable',
	Platform.PS1: 'PlayStation',
	Platform.PS2: 'PlayStation 2',
	Platform.Genesis: 'Sega Genesis',
	Platform.Dreamcast: 'Sega Dreamcast',
}

class DiscFormat(Enum):
	"""Container the dump is in, which is not necessarily the same thing as the platform"""
	Unknown = 0
	ISO = 1
	WBFS = 2
	RVZ = 3
	WUD = 4
	WUX = 5
	NKit = 6
	CIA = 7
	ThreeDSX = 8
	CSO = 9
	CHD = 10
	Folder = 11 #Wii U extracted folder structure (code/content/meta)
