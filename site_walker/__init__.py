# File: site_walker/__init__.py
"""
SiteWalker: обходчик страниц одного хоста.
Команда командной строки живёт в site_walker.cli (точка входа site-walker).
"""
__version__ = "0.1.0"
