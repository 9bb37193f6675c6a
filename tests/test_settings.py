from argparse import ArgumentParser
from pathlib import Path

import pytest

from discforge import config
from discforge.banner.banner_config import BannerConfig
from discforge.config import (add_settings_arguments, apply_settings_arguments,
                              current_config)
from discforge.identify.identify_config import IdentifyConfig
from discforge.settings.settings import (IniSettingsSource, MainConfig,
                                        sentinel)


def test_defaults():
	config = IdentifyConfig()
	assert config.header_size == 512
	assert not config.recursive_scan
	assert not BannerConfig().tiled_cmpr

def test_environment_variable(monkeypatch):
	monkeypatch.setenv('DISCFORGE_HEADER_SIZE', '1024')
	assert IdentifyConfig().header_size == 1024

def test_ini_section(tmp_path: Path):
	ini_path = tmp_path / 'test.ini'
	ini_path.write_text('[Identify]\nheader_size = 2048\n\n[Banner]\ntiled_cmpr = true\n', encoding='utf-8')
	values = IniSettingsSource(IdentifyConfig, 'Identify', ini_path)()
	assert values == {'header_size': '2048'}
	values = IniSettingsSource(BannerConfig, 'Banner', ini_path)()
	assert values == {'tiled_cmpr': 'true'}

def test_argparser_group():
	parser = ArgumentParser()
	IdentifyConfig.add_argparser_group(parser)
	args = parser.parse_args(['--identify:header-size', '4096', '--identify:recursive-scan'])
	assert vars(args)['IdentifyConfig.header_size'] == '4096'
	assert vars(args)['IdentifyConfig.recursive_scan'] is True

def test_argparser_group_unset_options():
	parser = ArgumentParser()
	BannerConfig.add_argparser_group(parser)
	args = parser.parse_args([])
	assert vars(args)['BannerConfig.tiled_cmpr'] is sentinel

def test_apply_settings_arguments(monkeypatch):
	monkeypatch.setattr(config, '_current_config', {})
	parser = ArgumentParser()
	add_settings_arguments(parser)
	args = parser.parse_args(['--logging-level', 'DEBUG', '--identify:header-size', '1024', '--banner:tiled-cmpr'])
	apply_settings_arguments(args)
	assert current_config(MainConfig).logging_level == 'DEBUG'
	assert current_config(IdentifyConfig).header_size == 1024
	assert current_config(BannerConfig).tiled_cmpr

def test_apply_settings_arguments_leaves_unset_options(monkeypatch):
	monkeypatch.setattr(config, '_current_config', {})
	parser = ArgumentParser()
	add_settings_arguments(parser)
	apply_settings_arguments(parser.parse_args([]))
	assert current_config(IdentifyConfig).header_size == 512

def test_section_help(capsys):
	parser = ArgumentParser()
	add_settings_arguments(parser)
	with pytest.raises(SystemExit):
		parser.parse_args(['--help-identify'])
	help_text = capsys.readouterr().err
	assert '--identify:header-size' in help_text
	assert '--banner:tiled-cmpr' not in help_text
