"""Keeps the one instance of each settings class for this process, and hooks them all up to argparse"""

import sys
from argparse import SUPPRESS, Action, ArgumentParser, Namespace
from typing import TYPE_CHECKING, NoReturn, TypeVar

from discforge.banner.banner_config import BannerConfig
from discforge.identify.identify_config import IdentifyConfig
from discforge.settings.settings import MainConfig, Settings, sentinel

if TYPE_CHECKING:
	from argparse import _ArgumentGroup

SettingsType = TypeVar('SettingsType', bound=Settings)

_settings_classes: tuple[type[Settings], ...] = (MainConfig, IdentifyConfig, BannerConfig)

_current_config: dict[type[Settings], Settings] = {}

def _section_help_action(group: '_ArgumentGroup') -> type[Action]:
	"""--help-<prefix>, which prints just that section's options"""
	class SectionHelpAction(Action):
		def __init__(self, option_strings: list[str], dest: str=SUPPRESS, help: str | None=None) -> None:  # noqa: A002
			super().__init__(option_strings, dest, nargs=0, default=SUPPRESS, help=help)

		def __call__(self, parser: ArgumentParser, *_args, **_kwargs) -> NoReturn:
			formatter = parser._get_formatter()
			formatter.add_usage(parser.usage, group._group_actions, [])
			formatter.start_section(group.title)
			formatter.add_text(group.description)
			formatter.add_arguments(group._group_actions)
			formatter.end_section()
			print(formatter.format_help(), file=sys.stderr)
			parser.exit()

	return SectionHelpAction

def add_settings_arguments(parser: ArgumentParser) -> None:
	"""Adds an option for every settings field; MainConfig's go straight on the parser, the others get their own group and a --help-<prefix>"""
	for cls in _settings_classes:
		group = cls.add_argparser_group(parser)
		prefix = cls.prefix()
		if prefix and not isinstance(group, ArgumentParser):
			parser.add_argument(f'--help-{prefix}', action=_section_help_action(group), help=f'Show only the {cls.section()} options and exit')

def apply_settings_arguments(args: Namespace) -> None:
	"""Puts whatever settings were given on the command line into the current config, overriding config.ini and the environment"""
	for cls in _settings_classes:
		for field_name in cls.model_fields:
			value = getattr(args, cls.option_dest(field_name), sentinel)
			if value is not sentinel:
				setattr(current_config(cls), field_name, value)

def current_config(cls: type[SettingsType]) -> SettingsType:
	"""The instance of cls for this process, loaded from config.ini/environment the first time it is asked for"""
	if cls not in _current_config:
		_current_config[cls] = cls()
	config = _current_config[cls]
	assert isinstance(config, cls)
	return config
