"""CLI commands for Plumb."""

from plumb.cli.commands.init import init_cmd
from plumb.cli.commands.hash_object import hash_object_cmd
from plumb.cli.commands.cat_file import cat_file_cmd
from plumb.cli.commands.ls_tree import ls_tree_cmd
from plumb.cli.commands.write_tree import write_tree_cmd
from plumb.cli.commands.commit_tree import commit_tree_cmd

__all__ = ['init_cmd', 'hash_object_cmd', 'cat_file_cmd', 'ls_tree_cmd',
           'write_tree_cmd', 'commit_tree_cmd']
