#!/usr/bin/env python3
from typing import List


class AssemblyFormatter:
    """Lay out translated assembly for readability"""

    def __init__(self, indent_size: int = 4):
        self.indent_size = indent_size

    def format_assembly(self, assembly_code: str) -> str:
        """Format assembly code"""
        formatted_lines = []
        for line in assembly_code.split('\n'):
            formatted_line = self._format_line(line)
            if formatted_line is not None:
                formatted_lines.append(formatted_line)

        final_lines = self._add_section_spacing(formatted_lines)
        text = '\n'.join(final_lines)
        return text + '\n' if text else ''

    def _format_line(self, line: str):
        """Format a single line"""
        stripped = line.strip()

        if not stripped:
            return None

        line_type = self._get_line_type(stripped)
        if line_type in ('label', 'section', 'directive', 'constant'):
            return stripped  # column 0
        return ' ' * self.indent_size + stripped

    def _add_section_spacing(self, lines: List[str]) -> List[str]:
        """Add a blank line before every section after the first line"""
        result = []
        for line in lines:
            if self._get_line_type(line) == 'section' and result:
                result.append('')
            result.append(line)
        return result

    def _get_line_type(self, line: str) -> str:
        """Determine the type of assembly line"""
        words = line.split()
        if not words:
            return 'empty'
        if words[0] == 'section':
            return 'section'
        if words[0] in ('global', 'extern'):
            return 'directive'
        if len(words) == 1 and line.endswith(':'):
            return 'label'
        if len(words) >= 2 and words[1] == 'equ':
            return 'constant'
        return 'instruction'


formatter = AssemblyFormatter()
