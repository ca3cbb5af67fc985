# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ProjectBrowser - Example console front-end for CheckableTree.

A didactic example showing the role of a rendering collaborator: it
draws the rows CheckableTree exposes and forwards every user action to
the engine, never touching node state itself.

Example:
    >>> browser = ProjectBrowser()
    >>> browser.search('js')
    >>> print(browser.render())
    [ ] (select all)
    [-] Project Folder
        [-] src
            [x] main.js
            [ ] app.js
    [ ] Config Files
        [ ] package.json
"""

from __future__ import annotations

import logging

from genro_checktree import CheckableNode, CheckableTree, TOGGLE

logger = logging.getLogger(__name__)

_MARKS = {True: '[x]', None: '[-]', False: '[ ]'}


def project_nodes() -> list[CheckableNode]:
    """The sample project folder shown by the browser."""
    return [
        CheckableNode('Project Folder', 'project_folder', children=[
            CheckableNode('src', icon='folder_open', children=[
                CheckableNode('main.js', 'main_js', icon='javascript', selected=True),
                CheckableNode('app.js', 'app_js', icon='javascript'),
                CheckableNode('styles.css', 'styles_css', icon='css'),
            ]),
            CheckableNode('public', 'public_folder', icon='folder_open', children=[
                CheckableNode('index.html', 'index_html', icon='html'),
                CheckableNode('favicon.ico', 'favicon', icon='image'),
            ]),
        ]),
        CheckableNode('Config Files', 'config_folder', children=[
            CheckableNode('package.json', 'package_json', icon='settings'),
            CheckableNode('.gitignore', 'gitignore', icon='remove_red_eye'),
        ]),
    ]


class ProjectBrowser:
    """Console rendering of a project tree with search and sort."""

    def __init__(self) -> None:
        self.keyword = ''
        self.tree = CheckableTree(
            project_nodes(),
            on_selection_changed=self.on_selection_changed,
            initial_expanded_levels=0,
            show_select_all=True,
            show_expand_collapse_button=True,
        )

    def on_selection_changed(self, values: list) -> None:
        logger.info("Selected node values: %s", values)

    def _matches(self, node: CheckableNode) -> bool:
        if not self.keyword:
            return True
        return self.keyword.lower() in (node.value or '').lower()

    def search(self, keyword: str) -> None:
        """Show only nodes whose value contains keyword (case-insensitive)."""
        self.keyword = keyword
        self.tree.filter(self._matches)

    def sort(self, order: str = 'default') -> None:
        """Sort by value: 'default', 'ascending' or 'descending'."""
        if order == 'default':
            self.tree.sort()
        elif order in ('ascending', 'descending'):
            self.tree.sort(
                key=lambda node: node.value or '',
                reverse=order == 'descending',
            )
        else:
            raise ValueError(f"Unknown sort order: {order}")

    def click(self, path: str) -> None:
        """Click the checkbox of the node at a positional path."""
        self.tree.toggle_selection(self.tree.get_node(path), TOGGLE)

    def render(self) -> str:
        """Return the visible rows as indented text."""
        lines = []
        if self.tree.config.show_select_all:
            lines.append(f"{_MARKS[self.tree.all_selected]} (select all)")
        for depth, node in self.tree.iter_rows():
            lines.append(f"{'    ' * depth}{_MARKS[node.check_state]} {node.label}")
        return '\n'.join(lines)


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(message)s')
    browser = ProjectBrowser()
    print(browser.render())
    browser.search('js')
    print(browser.render())
    browser.click('#0')
    browser.search('')
    browser.sort('descending')
    print(browser.render())
    for node in browser.tree.get_selected_nodes():
        print(f"Value: {node.value}, Label: {node.label}")
