# charts.py
import json
from typing import Any, Dict, Iterable

from data_store import Event
from reports import monthly_breakdown, phase_breakdown


def build_chart_payload(events: Iterable[Event]) -> Dict[str, Any]:
    evs = list(events)
    return {
        "monthly": monthly_breakdown(evs),
        "phases": phase_breakdown(evs),
    }


# =============================================================
# HTML/JS front-end
# - Bar chart: hours by month (ascending YYYY-MM)
# - Pie chart: hours by phase, fixed color per phase
# - A section is hidden when it has no rows
# =============================================================
HTML_TEMPLATE = r"""
<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8" />
  <title>SimLab Dashboard</title>
  <script src="https://cdn.jsdelivr.net/npm/chart.js@4.4.4/dist/chart.umd.min.js"></script>
  <style>
    body { font-family: Arial, sans-serif; margin: 4px 8px 16px; }
    .card { border:1px solid #bbf7d0; border-radius:10px; padding:10px 14px; background:#fff; margin-bottom:12px; }
    .card h4 { margin:0 0 8px 0; font-size:14px; }
    .chart-wrap { width:100%; height:__CHART_HEIGHT__px; position:relative; }
    .empty { display:none; }
  </style>
</head>
<body>

<div class="card" id="monthlyCard">
  <h4>Hours by Month</h4>
  <div class="chart-wrap"><canvas id="monthlyChart"></canvas></div>
</div>

<div class="card" id="phaseCard">
  <h4>Hours by Phase</h4>
  <div class="chart-wrap"><canvas id="phaseChart"></canvas></div>
</div>

<script>
const monthly = __MONTHLY__;
const phases  = __PHASES__;

if (!monthly.length) { document.getElementById('monthlyCard').classList.add('empty'); }
else {
  new Chart(document.getElementById('monthlyChart').getContext('2d'), {
    type: 'bar',
    data: { labels: monthly.map(r=>r.month), datasets: [{ label: 'hours', data: monthly.map(r=>r.hours), backgroundColor: '#10b981' }] },
    options: { responsive: true, maintainAspectRatio: false, scales: { y: { beginAtZero: true } }, plugins: { legend: { display: false } } }
  });
}

const labelPlugin = {
  id: 'phaseLabels',
  afterDatasetsDraw(chart){
    const { ctx } = chart; const meta = chart.getDatasetMeta(0);
    ctx.save(); ctx.font = '12px Arial'; ctx.fillStyle = '#111827'; ctx.textAlign = 'center';
    meta.data.forEach((arc, i)=>{ const p = arc.tooltipPosition(); ctx.fillText(`${phases[i].name}: ${phases[i].value}h`, p.x, p.y); });
    ctx.restore();
  }
};

if (!phases.length) { document.getElementById('phaseCard').classList.add('empty'); }
else {
  new Chart(document.getElementById('phaseChart').getContext('2d'), {
    type: 'pie',
    data: { labels: phases.map(r=>r.name), datasets: [{ data: phases.map(r=>r.value), backgroundColor: phases.map(r=>r.color) }] },
    options: { responsive: true, maintainAspectRatio: false, plugins: { legend: { display: false } } },
    plugins: [labelPlugin]
  });
}
</script>
</body>
</html>
"""


def render_dashboard_html(events: Iterable[Event], chart_height: int = 250) -> str:
    payload = build_chart_payload(events)
    return (
        HTML_TEMPLATE
          .replace("__MONTHLY__", json.dumps(payload["monthly"]))
          .replace("__PHASES__", json.dumps(payload["phases"]))
          .replace("__CHART_HEIGHT__", str(int(chart_height)))
    )


def dashboard_height(events: Iterable[Event], chart_height: int = 250) -> int:
    """Iframe height needed for the sections that will actually render."""
    payload = build_chart_payload(events)
    cards = sum(1 for k in ("monthly", "phases") if payload[k])
    return cards * (int(chart_height) + 60) + 20
