"""Base class for each [section] of config.ini, and the options that don't belong to identifying or banners"""

import logging
from argparse import ArgumentParser, BooleanOptionalAction
from configparser import RawConfigParser
from pathlib import Path
from typing import TYPE_CHECKING, Any

from class_doc import extract_docs_from_cls_obj
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource

from discforge.common_paths import config_dir

if TYPE_CHECKING:
	from argparse import _ArgumentGroup

	from pydantic.fields import FieldInfo

logger = logging.getLogger(__name__)

config_path = config_dir / 'config.ini'

class _CaseSensitiveConfigParser(RawConfigParser):
	"""Only = separates an option from its value, and option names are left alone instead of being lowercased"""
	def __init__(self) -> None:
		super().__init__(delimiters=('=', ), comment_prefixes=('#', ';'))

	def optionxform(self, optionstr: str) -> str:
		return optionstr

class IniSettingsSource(PydanticBaseSettingsSource):
	"""One [section] of an ini file. Values come out as strings and pydantic converts them; anything not in the file is left out so the default is used"""
	def __init__(self, settings_cls: type[BaseSettings], section: str, path: Path=config_path) -> None:
		super().__init__(settings_cls)
		self.section = section
		self.parser = _CaseSensitiveConfigParser()
		if self.parser.read(path, encoding='utf-8'):
			logger.debug('Read [%s] from %s', section, path)

	def get_field_value(self, field: 'FieldInfo', field_name: str) -> tuple[Any, str, bool]:
		return self.parser.get(self.section, field_name, fallback=None), field_name, False

	def __call__(self) -> dict[str, Any]:
		values = {}
		for field_name, field in self.settings_cls.model_fields.items():
			value, key, _ = self.get_field_value(field, field_name)
			if value is not None:
				values[key] = value
		return values

sentinel = object()
"""Default for every generated command line option, so apply_settings_arguments can tell what was actually given"""

class Settings(BaseSettings):
	"""One [section] of config.ini, and one group of command line options (unless prefix is None, then they go straight onto the parser)

	Later ones win: field default, config.ini, DISCFORGE_ environment variables, command line"""
	model_config = SettingsConfigDict(env_prefix='DISCFORGE_', validate_assignment=True)

	@classmethod
	def settings_customise_sources(
		cls,
		settings_cls: type[BaseSettings],
		init_settings: PydanticBaseSettingsSource,
		env_settings: PydanticBaseSettingsSource,
		dotenv_settings: PydanticBaseSettingsSource,
		file_secret_settings: PydanticBaseSettingsSource,
	) -> tuple[PydanticBaseSettingsSource, ...]:
		return (init_settings, env_settings, IniSettingsSource(settings_cls, cls.section()))

	@classmethod
	def section(cls) -> str:
		raise NotImplementedError

	@classmethod
	def prefix(cls) -> str | None:
		"""Goes in front of the command line options (--prefix:option-name), and names the --help-prefix option"""
		return None

	@classmethod
	def option_dest(cls, field_name: str) -> str:
		#Qualified so the same field name in two sections doesn't collide in the Namespace
		return f'{cls.__name__}.{field_name}'

	@classmethod
	def option_string(cls, name: str) -> str:
		option = name.replace('_', '-')
		prefix = cls.prefix()
		return f'--{prefix}:{option}' if prefix else f'--{option}'

	@classmethod
	def add_argparser_group(cls, parser: ArgumentParser) -> 'ArgumentParser | _ArgumentGroup':
		"""Adds an option for each field, with the field's docstring as help"""
		group = parser if cls.prefix() is None else parser.add_argument_group(cls.section(), cls.__doc__)
		docs = extract_docs_from_cls_obj(cls)
		for name, field in cls.model_fields.items():
			help_text = docs[name][0] if name in docs else None
			if field.annotation is bool:
				group.add_argument(cls.option_string(name), action=BooleanOptionalAction, default=sentinel, dest=cls.option_dest(name), help=help_text)
			else:
				#pydantic does the converting when it gets assigned
				group.add_argument(cls.option_string(name), default=sentinel, dest=cls.option_dest(name), help=help_text, metavar=name.upper())
		return group

class MainConfig(Settings):
	"""General options"""

	@classmethod
	def section(cls) -> str:
		return 'General'

	logging_level: str = 'INFO'
	"""Logging level (DEBUG, INFO, WARNING, ERROR)"""

	drive_root: Path | None = None
	"""Root of the USB drive/SD card that games get organized into, if not specified on the command line"""

	sanitize_names: bool = True
	"""Clean up internal titles before putting them in organized paths, as they can have characters that FAT32 doesn't like"""
