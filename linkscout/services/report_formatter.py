from collections import OrderedDict
from typing import List

from linkscout.domain.crawl_report import CrawlReport
from linkscout.domain.link_result import LinkResult, LinkState


class ReportFormatter:
    """Turns a `CrawlReport` into JSON-ready data or a terminal summary."""

    def to_dict(self, report: CrawlReport) -> dict:
        counts = {state.value: 0 for state in LinkState}
        for r in report.results:
            counts[r.state.value] += 1
        return {
            "passed": report.passed,
            "total": len(report.results),
            "counts": counts,
            "links": [r.to_dict() for r in report.results],
        }

    def render_text(self, report: CrawlReport, show_all: bool = False) -> str:
        lines: List[str] = []
        if show_all:
            for r in report.results:
                lines.append(self._line(r))
            lines.append("")

        broken = report.by_state(LinkState.BROKEN)
        if broken:
            grouped: "OrderedDict[str, List[LinkResult]]" = OrderedDict()
            for r in broken:
                grouped.setdefault(r.parent or "(root)", []).append(r)
            lines.append("Broken links:")
            for parent, results in grouped.items():
                lines.append(f"  {parent}")
                for r in results:
                    lines.append(f"    {self._line(r)}")
            lines.append("")

        data = self.to_dict(report)
        counts = data["counts"]
        verdict = "PASSED" if report.passed else "FAILED"
        lines.append(
            f"{verdict}: scanned {data['total']} links "
            f"({counts['OK']} ok, {counts['BROKEN']} broken, {counts['SKIPPED']} skipped)"
        )
        return "\n".join(lines)

    def _line(self, r: LinkResult) -> str:
        status = "SKP" if r.state is LinkState.SKIPPED else str(r.status)
        return f"[{status}] {r.url}"
