from pathlib import Path

app_name = 'DiscForge'

#TODO: Get this in a less hardcody cross-platform way, I guess
config_dir = Path('~/.config', app_name).expanduser()
data_dir = Path('~/.local/share', app_name).expanduser()
