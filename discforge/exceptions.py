class DiscForgeError(Exception):
	"""Base class for all "this thing inside the file is not what it says it is" exceptions"""

class ArchiveError(DiscForgeError):
	"""U8 archive is malformed: wrong magic, or some node/name/data range points outside the buffer it lives in"""

class TextureError(DiscForgeError):
	"""TPL texture is malformed or describes an image we can't make sense of"""
