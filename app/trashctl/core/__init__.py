"""Core infrastructure for trashctl: paths, configuration and theming."""
