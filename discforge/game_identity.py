from dataclasses import dataclass

from discforge.common_types import DiscFormat, Platform
from discforge.util.utils import format_byte_size


@dataclass
class GameIdentity():
	"""What identify_from_header and friends figured out about a file. Everything not set by the signature that matched stays empty/zero"""
	platform: Platform = Platform.Unknown
	disc_format: DiscFormat = DiscFormat.Unknown
	title_id: str = ''
	"""e.g. RSPE01 for Wii Sports, the length depends on the platform (6 at most)"""
	game_title: str = ''
	"""Internal title from the header, not necessarily what the game is actually called"""
	region: str = ''
	"""Region character from Wii/GameCube disc headers ('E', 'P', 'J', etc), empty for everything else"""
	disc_number: int = 0
	file_size: int = 0
	is_scrubbed: bool = False
	requires_cios: bool = False

	def __str__(self) -> str:
		s = f'{self.platform.display_name} ({self.disc_format.name})'
		if self.game_title:
			s += f': {self.game_title}'
		if self.title_id:
			s += f' [{self.title_id}]'
		if self.file_size:
			s += f', {format_byte_size(self.file_size)}'
		return s
