from typing import Optional
from html import escape as html_escape
import json

from diffcore import DiffOperation, DiffResult
from formatters.base import BaseFormatter, FormatterConfig, FormatterFactory, flatten


DEFAULT_STYLES = """
body { font-family: monospace; margin: 20px; background: #fafafa; color: #333; }
.diff-container { border: 1px solid #ddd; border-radius: 4px; overflow: hidden; margin-bottom: 20px; }
.diff-header { background: #f7f7f7; padding: 10px 15px; border-bottom: 1px solid #ddd; font-weight: bold; }
table { width: 100%; border-collapse: collapse; font-size: 13px; }
td { padding: 2px 8px; vertical-align: top; white-space: pre-wrap; word-wrap: break-word; }
.line-num { width: 50px; text-align: right; color: #999; background: #f7f7f7; border-right: 1px solid #eee; }
.equal { background: #fff; }
.delete { background: #ffeef0; }
.delete .line-num { background: #ffdce0; color: #cb2431; }
.insert { background: #e6ffed; }
.insert .line-num { background: #cdffd8; color: #22863a; }
.marker { width: 20px; text-align: center; font-weight: bold; }
.marker-del { color: #cb2431; background: #ffdce0; }
.marker-ins { color: #22863a; background: #cdffd8; }
.stats { padding: 10px 15px; background: #f7f7f7; border-top: 1px solid #ddd; font-size: 12px; }
.stats .additions { color: #22863a; }
.stats .deletions { color: #cb2431; }
"""

_ROW_STYLE = {
    DiffOperation.EQUAL: ("equal", "marker", " "),
    DiffOperation.DELETE: ("delete", "marker marker-del", "-"),
    DiffOperation.INSERT: ("insert", "marker marker-ins", "+"),
}


class HTMLFormatter(BaseFormatter):
    def __init__(self, config: Optional[FormatterConfig] = None):
        super().__init__(config)

    def _line_cell(self, index: Optional[int]) -> str:
        if not self.config.show_line_numbers:
            return ""
        return f'<td class="line-num">{"" if index is None else index + 1}</td>'

    def _format_impl(self, result: DiffResult, file1: str, file2: str):
        rows, insertions, deletions = [], 0, 0
        for line in flatten(result):
            css, marker_css, marker = _ROW_STYLE[line.op]
            rows.append(f'<tr class="{css}">{self._line_cell(line.left_index)}'
                        f'<td class="{marker_css}">{marker}</td>{self._line_cell(line.right_index)}'
                        f'<td>{html_escape(line.text)}</td></tr>')
            if line.op == DiffOperation.DELETE:
                deletions += 1
            elif line.op == DiffOperation.INSERT:
                insertions += 1

        html = f"""<!DOCTYPE html>
<html><head><meta charset="UTF-8"><title>Diff: {html_escape(file1)} vs {html_escape(file2)}</title>
<style>{DEFAULT_STYLES}</style></head><body>
<div class="diff-container">
<div class="diff-header"><span>--- {html_escape(file1)}</span><br><span>+++ {html_escape(file2)}</span></div>
<table>{"".join(rows)}</table>
<div class="stats"><span class="additions">+{insertions}</span>, <span class="deletions">-{deletions}</span></div>
</div></body></html>"""
        self._write(html)


class JSONFormatter(BaseFormatter):
    def _format_impl(self, result: DiffResult, file1: str, file2: str):
        chunks = []
        for chunk in result.chunks:
            chunks.append({
                "operation": chunk.operation.value,
                "description": chunk.description,
                "left": {"start": chunk.left_range.start, "end": chunk.left_range.stop,
                         "lines": result.left_lines[chunk.left_range.start:chunk.left_range.stop]},
                "right": {"start": chunk.right_range.start, "end": chunk.right_range.stop,
                          "lines": result.right_lines[chunk.right_range.start:chunk.right_range.stop]},
            })
        document = {
            "file1": file1,
            "file2": file2,
            "has_changes": result.has_changes,
            "chunks": chunks,
            "stats": {"insertions": result.insertions, "deletions": result.deletions,
                      "modifications": result.modifications},
        }
        self._write(json.dumps(document, indent=2, ensure_ascii=False))


FormatterFactory.register("html", HTMLFormatter)
FormatterFactory.register("json", JSONFormatter)
