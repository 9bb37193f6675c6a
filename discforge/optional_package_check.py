#!/usr/bin/env python3

from discforge.util.utils import have_termcolor

try:
	from PIL import __version__ as pillow_version
except ImportError:
	have_pillow = False
	pillow_version = ''
else:
	have_pillow = True


def main() -> None:
	if have_pillow:
		print('Pillow installed, version', pillow_version)
	else:
		print('Pillow not installed or importable, banner images cannot be saved')
	print('termcolor:', have_termcolor)


if __name__ == '__main__':
	main()
