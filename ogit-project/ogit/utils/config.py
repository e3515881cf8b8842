# What it does: Manages all read/write operations for the `.ogit/config` file
# What data structure it uses: Map / Hash Table / Dictionary (the INI file format is a map of sections to key-value pairs, managed by Python's `configparser`)

import configparser
import os

from .errors import IdentityUnknown
from .repository import store_path


def get_config_path(repo_root):  # Returns the path to the config file within the repository
    return os.path.join(store_path(repo_root), 'config')


def read_config(repo_root): # Reads and returns the configuration as a ConfigParser object
    config = configparser.ConfigParser()
    config_path = get_config_path(repo_root)
    if os.path.exists(config_path):
        config.read(config_path)
    return config


def write_config(repo_root, key, value): # Sets a configuration key to a value and writes it to the config file
    try:
        section, option = key.split('.', 1)
    except ValueError:
        raise ValueError("Invalid key format. Should be 'section.key'.")

    config = read_config(repo_root)
    if not config.has_section(section):
        config.add_section(section)

    config.set(section, option, value)

    with open(get_config_path(repo_root), 'w') as configfile:
        config.write(configfile)


def get_user_identity(repo_root): # "Name <email>" from user.name and user.email
    config = read_config(repo_root)
    user_name = config.get('user', 'name', fallback=None)
    user_email = config.get('user', 'email', fallback=None)
    if not user_name or not user_email:
        raise IdentityUnknown()
    return f"{user_name} <{user_email}>"
