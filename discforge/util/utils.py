import logging
from collections.abc import Mapping

try:
	import termcolor
	have_termcolor = True
except ImportError:
	have_termcolor = False


def decode_fixed_width(field: bytes) -> str:
	"""Decodes a fixed-width text field from some header, with the trailing spaces and nulls cut off
	Every byte comes through as-is (Latin-1), since there's no one encoding that all these headers agree on; GameCube titles from Japan are Shift-JIS, for example"""
	return field.rstrip(b'\0 ').decode('latin-1')


def decode_utf16be_lossy(data: bytes, offset: int, field_size: int = 64) -> str:
	"""Reads a null-terminated UTF-16BE string from data at offset, no more than field_size bytes of it
	Deliberately lossy: every code unit >= 0x80 becomes ?, so what comes out is always plain ASCII"""
	chars = []
	end = min(offset + field_size - 1, len(data) - 1)
	for i in range(offset, end, 2):
		code_unit = int.from_bytes(data[i : i + 2], 'big')
		if code_unit == 0:
			break
		chars.append(chr(code_unit) if code_unit < 0x80 else '?')
	return ''.join(chars)


def format_byte_size(size: int, *, metric: bool = False) -> str:
	"""e.g. 4.38 GiB, or 4.7 GB if metric"""
	base = 1000 if metric else 1024
	if size < base:
		return f'{size} bytes'
	amount = float(size)
	for prefix in 'KMGTP':
		amount /= base
		if amount < base:
			break
	number = f'{amount:.2f}'.rstrip('0').rstrip('.')
	return f'{number} {prefix}{"B" if metric else "iB"}'


class ColouredFormatter(logging.Formatter):
	"""Colours each log line by level with termcolor, or leaves it alone if termcolor isn't installed"""

	level_colours: Mapping[int, str] = {
		logging.DEBUG: 'green',
		logging.WARNING: 'yellow',
		logging.ERROR: 'red',
		logging.CRITICAL: 'red',
	}

	def format(self, record: logging.LogRecord) -> str:
		message = super().format(record)
		colour = self.level_colours.get(record.levelno)
		if have_termcolor and colour:
			return termcolor.colored(message, colour)
		return message
