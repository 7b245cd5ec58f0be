"""HTML page shells for the browser-source views.

Pages are transparent-background overlays and reload themselves on a timer.
"""

from __future__ import annotations

from jinja2 import Environment
from markupsafe import Markup

_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

_BASE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{{ title }}</title>
<style>
body { font-family: Arial, sans-serif; background: transparent; color: #fff;
       margin: 0; text-shadow: 2px 2px 4px rgba(0,0,0,0.8); }
{{ css }}
</style>
<script>setInterval(function () { location.reload(); }, {{ reload_ms }});</script>
</head>
<body>
{{ body }}
</body>
</html>
"""

DATA_CSS = """\
body { padding: 20px; font-size: 24px; line-height: 1.6; }
.container { max-width: 1200px; margin: 0 auto; }
.data-content { white-space: pre-wrap; word-wrap: break-word; }
.last-updated { font-size: 16px; color: #ccc; margin-top: 20px; font-style: italic; }
.error { color: #ff6b6b; }
"""

TICKER_CSS = """\
body { overflow: hidden; font-size: 28px; font-weight: bold; }
.ticker-container { width: 100%; height: 60px; display: flex; align-items: center;
                    overflow: hidden; border-top: 3px solid rgba(255,255,255,0.8);
                    border-bottom: 3px solid rgba(255,255,255,0.8); }
.ticker-content { white-space: nowrap; display: flex; padding-left: 100%;
                  animation: scroll 90s linear infinite; }
.ticker-item { margin-right: 80px; display: inline-flex; align-items: center; }
.ticker-label { background: rgba(30,144,255,0.8); padding: 4px 12px; border-radius: 20px;
                margin-right: 15px; font-size: 24px; }
.breaking .ticker-label { background: rgba(220,20,60,0.9); }
@keyframes scroll { 0% { transform: translate3d(0,0,0); } 100% { transform: translate3d(-100%,0,0); } }
"""

COMPACT_CSS = """\
body { padding: 20px; font-size: 20px; line-height: 1.4; }
.compact-container { max-width: 600px; border: 2px solid rgba(30,144,255,0.6);
                     border-radius: 10px; padding: 15px; }
.header { font-size: 24px; font-weight: bold; margin-bottom: 10px; text-align: center; color: #87CEEB; }
.summary { font-size: 18px; margin-bottom: 15px; text-align: center; }
.report-line { font-size: 16px; margin: 8px 0; padding: 5px 0;
               border-bottom: 1px solid rgba(255,255,255,0.2); }
.last-updated { font-size: 14px; color: #ccc; text-align: center; margin-top: 15px; font-style: italic; }
"""

DASHBOARD_CSS = """\
body { padding: 20px; font-size: 18px; }
h1 { text-align: center; color: #87CEEB; }
.stats { display: flex; gap: 16px; justify-content: center; margin-bottom: 24px; }
.stat { border: 2px solid rgba(30,144,255,0.6); border-radius: 10px; padding: 12px 20px; text-align: center; }
.stat-value { font-size: 32px; font-weight: bold; }
.stat-label { font-size: 14px; color: #ccc; }
.group h2 { font-size: 22px; margin: 16px 0 8px; }
.card { border-left: 4px solid rgba(30,144,255,0.8); padding: 6px 12px; margin: 6px 0;
        background: rgba(0,0,0,0.25); }
.card .time { color: #ccc; font-size: 14px; }
.card .details { font-size: 16px; }
.card .source { font-size: 13px; color: #aaa; }
.message { text-align: center; font-size: 22px; }
.error { color: #ff6b6b; }
.last-updated { font-size: 14px; color: #ccc; text-align: center; margin-top: 15px; font-style: italic; }
"""

DATA_BODY = _env.from_string("""\
<div class="container">
<div class="data-content{% if is_error %} error{% endif %}">{{ text }}</div>
<div class="last-updated">Last updated: {{ updated }}</div>
</div>
""")

TICKER_BODY = _env.from_string("""\
<div class="ticker-container">
<div class="ticker-content">
{% for item in items %}
<div class="ticker-item{% if item.significant %} breaking{% endif %}"><span class="ticker-label">{{ item.label }}</span>{{ item.text }}</div>
{% endfor %}
</div>
</div>
""")

COMPACT_BODY = _env.from_string("""\
<div class="compact-container">
<div class="header">{{ compact.header }}</div>
<div class="summary">{{ compact.summary }}</div>
{% if compact.state_lines or compact.group_lines %}
<div class="reports">
{% for line in compact.state_lines %}
<div class="report-line">{{ line }}</div>
{% endfor %}
{% for line in compact.group_lines %}
<div class="report-line">{{ line }}</div>
{% endfor %}
</div>
{% endif %}
<div class="last-updated">Updated: {{ updated }}</div>
</div>
""")

DASHBOARD_BODY = _env.from_string("""\
<h1>{{ dash.title }}</h1>
{% if dash.stats %}
<div class="stats">
{% for stat in dash.stats %}
<div class="stat"><div class="stat-value">{{ stat.value }}</div><div class="stat-label">{{ stat.label }}</div></div>
{% endfor %}
</div>
{% endif %}
{% if dash.message %}
<div class="message{% if dash.status == 'error' %} error{% endif %}">{{ dash.message }}</div>
{% endif %}
{% for group in dash.groups %}
<div class="group">
<h2>{{ group.emoji }} {{ group.weather_type }} ({{ group.count }})</h2>
{% for card in group.cards %}
<div class="card">
<div class="location">{{ card.location }} <span class="time">{{ card.time }}</span></div>
{% if card.details %}<div class="details">{{ card.details }}</div>{% endif %}
{% if card.source %}<div class="source">Source: {{ card.source }}</div>{% endif %}
</div>
{% endfor %}
</div>
{% endfor %}
<div class="last-updated">Updated: {{ updated }}</div>
""")

PAGE = _env.from_string(_BASE)


def render_page(title: str, css: str, body: str, reload_ms: int) -> str:
    """Wrap a rendered *body* fragment in the shared page shell."""
    return PAGE.render(title=title, css=Markup(css), body=Markup(body), reload_ms=reload_ms)
