"""Magic bytes for everything identify_from_header knows about, in the order they need to be checked in

Container formats (WBFS, RVZ, WUD) go first, because they wrap a disc header that would otherwise match the raw disc checks further down. Don't reorder these"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from discforge.common_types import DiscFormat, Platform
from discforge.game_identity import GameIdentity
from discforge.util.utils import decode_fixed_width

WII_MAGIC = b']\x1c\x9e\xa3'
GAMECUBE_MAGIC = b'\xc23\x9f='
WBFS_MAGIC = b'WBFS'
RVZ_MAGIC = b'RVZ' #Followed by version, so only the first 3 are checked
WUD_MAGIC = b'WUP'
NES_MAGIC = b'NES\x1a'
N64_MAGICS = (
	b'\x807\x12@', #.z64 (big endian)
	b'@\x127\x80', #.n64 (byteswapped)
	b'7\x80@\x12', #.v64 (wordswapped)
)
#First 8 bytes of the Nintendo logo, there's more of it but this is enough to tell
GAME_BOY_LOGO = b'\xce\xedff\xcc\r\x00\x0b'
GBA_LOGO = b'$\xff\xaeQi\x9a\xa2!'
NDS_LOGO = GBA_LOGO[:4]
GENESIS_MAGIC = b'SEGA'

_WBFS_DISC_HEADER_OFFSET = 0x200

@dataclass(frozen=True)
class Signature():
	"""One way of recognizing a file: any of patterns at offset, plus optionally some extra sanity check
	read_fields fills in whatever else can be read out of the header once it matches"""
	name: str
	patterns: Sequence[bytes]
	offset: int
	platform: Platform
	disc_format: DiscFormat = DiscFormat.Unknown
	min_header_size: int = 0
	check: Callable[[bytes], bool] | None = None
	read_fields: Callable[[bytes, GameIdentity], None] | None = None

	def matches(self, header: bytes) -> bool:
		if len(header) < self.min_header_size:
			return False
		if not any(check_magic(header, self.offset, pattern) for pattern in self.patterns):
			return False
		return self.check is None or self.check(header)

	def identify(self, header: bytes) -> GameIdentity:
		identity = GameIdentity(self.platform, self.disc_format)
		if self.read_fields:
			self.read_fields(header, identity)
		return identity

def check_magic(header: bytes, offset: int, magic: bytes) -> bool:
	if offset + len(magic) > len(header):
		return False
	return header[offset : offset + len(magic)] == magic

def _read_text(header: bytes, offset: int, length: int) -> str:
	return decode_fixed_width(header[offset : offset + length])

def _disc_header_reader(disc_header_offset: int) -> Callable[[bytes, GameIdentity], None]:
	def read_disc_header(header: bytes, identity: GameIdentity) -> None:
		if len(header) < disc_header_offset + 0x40:
			#WBFS that was only partially read, the container is all we know
			return
		identity.title_id = _read_text(header, disc_header_offset, 6)
		identity.game_title = _read_text(header, disc_header_offset + 0x20, 64)
		identity.region = chr(header[disc_header_offset + 3]).rstrip('\0')
		identity.disc_number = header[disc_header_offset + 6]
	return read_disc_header

def _read_nes_fields(_: bytes, identity: GameIdentity) -> None:
	#iNES headers don't have a title
	identity.game_title = 'NES ROM'

def _read_n64_fields(header: bytes, identity: GameIdentity) -> None:
	identity.game_title = _read_text(header, 0x20, 20)
	identity.title_id = _read_text(header, 0x3b, 4)

def _read_game_boy_fields(header: bytes, identity: GameIdentity) -> None:
	#CGB flag: 0x80 = works on both, 0xc0 = GBC only
	if header[0x143] in {0x80, 0xc0}:
		identity.platform = Platform.GBC
	identity.game_title = _read_text(header, 0x134, 16)

def _read_gba_fields(header: bytes, identity: GameIdentity) -> None:
	identity.game_title = _read_text(header, 0xa0, 12)
	identity.title_id = _read_text(header, 0xac, 4)

def _nds_rom_size_looks_valid(header: bytes) -> bool:
	rom_size = int.from_bytes(header[0x80:0x84], 'little')
	return 0 < rom_size < 0x2000_0000 #512MB is as big as they get

def _read_nds_fields(header: bytes, identity: GameIdentity) -> None:
	identity.game_title = _read_text(header, 0, 12)
	identity.title_id = _read_text(header, 0x0c, 4)

def _read_genesis_fields(header: bytes, identity: GameIdentity) -> None:
	identity.game_title = _read_text(header, 0x120, 48)

signatures: Sequence[Signature] = (
	Signature('WBFS', (WBFS_MAGIC, ), 0, Platform.Wii, DiscFormat.WBFS, read_fields=_disc_header_reader(_WBFS_DISC_HEADER_OFFSET)),
	#RVZ could be GameCube too, but we'd need to decompress the disc header to find out, and Wii is more likely
	Signature('RVZ', (RVZ_MAGIC, ), 0, Platform.Wii, DiscFormat.RVZ),
	Signature('WUD', (WUD_MAGIC, ), 0, Platform.WiiU, DiscFormat.WUD),
	Signature('Wii disc', (WII_MAGIC, ), 0x1c, Platform.Wii, DiscFormat.ISO, min_header_size=0x20, read_fields=_disc_header_reader(0)),
	Signature('GameCube disc', (GAMECUBE_MAGIC, ), 0x1c, Platform.GameCube, DiscFormat.ISO, min_header_size=0x20, read_fields=_disc_header_reader(0)),
	Signature('iNES', (NES_MAGIC, ), 0, Platform.NES, read_fields=_read_nes_fields),
	Signature('N64', N64_MAGICS, 0, Platform.N64, read_fields=_read_n64_fields),
	Signature('Game Boy logo', (GAME_BOY_LOGO, ), 0x104, Platform.GameBoy, min_header_size=0x150, read_fields=_read_game_boy_fields),
	Signature('GBA logo', (GBA_LOGO, ), 0x04, Platform.GBA, min_header_size=0xc0, read_fields=_read_gba_fields),
	Signature('NDS logo', (NDS_LOGO, ), 0xc0, Platform.NDS, min_header_size=0x160, check=_nds_rom_size_looks_valid, read_fields=_read_nds_fields),
	Signature('Mega Drive', (GENESIS_MAGIC, ), 0x100, Platform.Genesis, min_header_size=0x110, read_fields=_read_genesis_fields),
)
