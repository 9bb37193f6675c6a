from discforge.settings.settings import Settings


class IdentifyConfig(Settings):
	"""Options for identifying and scanning for game files"""

	@classmethod
	def section(cls) -> str:
		return 'Identify'

	@classmethod
	def prefix(cls) -> str | None:
		return 'identify'

	header_size: int = 512
	"""How many bytes to read from the start of each file, every known signature fits in the default"""

	recursive_scan: bool = False
	"""Look in subfolders when scanning a folder"""
