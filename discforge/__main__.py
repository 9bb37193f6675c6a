#!/usr/bin/env python3

import logging
from argparse import ArgumentParser, Namespace
from collections.abc import Sequence
from pathlib import Path

from discforge.banner.banner_config import BannerConfig
from discforge.banner.opening_bnr import (extract_banner, free_banner_data,
                                          have_pillow, save_banner_image)
from discforge.config import (add_settings_arguments, apply_settings_arguments,
                              current_config)
from discforge.game_identity import GameIdentity
from discforge.identify.identifier import (identify_from_file,
                                           identify_wiiu_folder, scan_folder)
from discforge.identify.identify_config import IdentifyConfig
from discforge.identify.organize import get_organized_path
from discforge.settings.settings import MainConfig
from discforge.util.utils import ColouredFormatter
from discforge.version import __version__

logger = logging.getLogger(__package__)

def _setup_logging() -> None:
	stream_handler = logging.StreamHandler()
	stream_handler.setFormatter(
		ColouredFormatter(fmt='%(asctime)s:%(name)s:%(funcName)s:%(levelname)s:%(message)s')
	)
	logger.handlers.clear()
	logger.addHandler(stream_handler)
	logger.setLevel(current_config(MainConfig).logging_level.upper())

def _identify_path(path: Path) -> GameIdentity | None:
	if path.is_dir():
		return identify_wiiu_folder(path)
	return identify_from_file(path, current_config(IdentifyConfig).header_size)

def _identify(args: Namespace) -> int:
	status = 0
	for path in args.paths:
		try:
			identity = _identify_path(path)
		except OSError:
			logger.exception('Could not read %s', path)
			status = 1
			continue
		print(f'{path}: {identity if identity else "Unknown"}')
	return status

def _scan(args: Namespace) -> int:
	identify_config = current_config(IdentifyConfig)
	recursive = args.recursive if args.recursive is not None else identify_config.recursive_scan
	found = 0
	for path, identity in scan_folder(args.folder, recursive, identify_config.header_size):
		print(f'{path}: {identity}')
		found += 1
	logger.info('Found %d games in %s', found, args.folder)
	return 0

def _organize(args: Namespace) -> int:
	main_config = current_config(MainConfig)
	drive_root = args.drive_root or main_config.drive_root
	if not drive_root:
		logger.error('No drive root given, use --drive-root or set drive_root in config')
		return 1
	status = 0
	for path in args.paths:
		try:
			identity = _identify_path(path)
		except OSError:
			logger.exception('Could not read %s', path)
			status = 1
			continue
		if not identity:
			logger.warning('Could not identify %s, not organizing it', path)
			status = 1
			continue
		print(get_organized_path(identity, str(drive_root), sanitize=main_config.sanitize_names))
	return status

def _banner(args: Namespace) -> int:
	banner_config = current_config(BannerConfig)
	try:
		banner = extract_banner(args.path, tiled=banner_config.tiled_cmpr)
	except OSError:
		logger.exception('Could not read %s', args.path)
		return 1

	print(f'Title: {banner.game_title}')
	print(f'Subtitle: {banner.game_subtitle}')
	if banner.rgba_data is None:
		print('No image')
	else:
		print(f'Image: {banner.width}x{banner.height}')
		if args.output or args.save:
			output = args.output or banner_config.image_folder / f'{args.path.stem}.png'
			if have_pillow:
				save_banner_image(banner, output)
				print(f'Saved to {output}')
			else:
				logger.error('Pillow is not installed, so the banner image cannot be saved')
	free_banner_data(banner)
	return 0

def _get_parser() -> ArgumentParser:
	parser = ArgumentParser(prog='discforge', description='Identifies Wii/GameCube discs and ROMs, and gets stuff out of Wii banners')
	parser.add_argument('--version', action='version', version=__version__)
	add_settings_arguments(parser)
	subparsers = parser.add_subparsers(dest='command', required=True)

	identify_parser = subparsers.add_parser('identify', help='Print what each file is')
	identify_parser.add_argument('paths', nargs='+', type=Path)
	identify_parser.set_defaults(func=_identify)

	scan_parser = subparsers.add_parser('scan', help='Print every identifiable file in a folder')
	scan_parser.add_argument('folder', type=Path)
	scan_parser.add_argument('--recursive', action='store_true', default=None)
	scan_parser.set_defaults(func=_scan)

	organize_parser = subparsers.add_parser('organize', help='Print where each file should go on a USB loader drive')
	organize_parser.add_argument('paths', nargs='+', type=Path)
	organize_parser.add_argument('--drive-root', help='Root of the drive, overrides drive_root in config')
	organize_parser.set_defaults(func=_organize)

	banner_parser = subparsers.add_parser('banner', help='Print the title from a Wii opening.bnr and optionally save its image')
	banner_parser.add_argument('path', type=Path)
	banner_parser.add_argument('--output', '-o', type=Path, help='Save the banner image here (requires Pillow)')
	banner_parser.add_argument('--save', action='store_true', help='Save the banner image into image_folder from banner config')
	banner_parser.set_defaults(func=_banner)
	return parser

def main(argv: Sequence[str] | None=None) -> int:
	args = _get_parser().parse_args(argv)
	apply_settings_arguments(args)
	_setup_logging()
	return args.func(args)

if __name__ == '__main__':
	raise SystemExit(main())
