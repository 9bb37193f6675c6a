from pathlib import Path

from discforge.common_paths import data_dir
from discforge.settings.settings import Settings


class BannerConfig(Settings):
	"""Options for extracting Wii banners"""

	@classmethod
	def section(cls) -> str:
		return 'Banner'

	@classmethod
	def prefix(cls) -> str | None:
		return 'banner'

	tiled_cmpr: bool = False
	"""Decode banner images in the 8x8 tile order the Wii GPU actually uses, instead of one 4x4 block after another"""

	image_folder: Path = data_dir / 'banners'
	"""Folder to save banner images to when no output path is given"""
