"""Installed version of calcline."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    try:
        return version("calcline")
    except PackageNotFoundError:
        return "0.0.0"
