"""HTML template assets for report rendering."""

from __future__ import annotations


def render_html_document(
    *,
    title: str,
    subtitle: str,
    dashboard_cards: str,
    annual_table: str,
    income_table: str,
    asset_table: str,
    validation_table: str,
    advisor_panel: str,
    payload_json: str,
) -> str:
    return f"""<!doctype html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\" />
  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
  <title>{title}</title>
  <style>
    :root {{
      --bg: #f5f6fb;
      --panel: #ffffff;
      --ink: #111827;
      --muted: #6b7280;
      --line: #e5e7eb;
      --brand: #4f46e5;
      --ok: #15803d;
      --warn: #b91c1c;
    }}
    * {{ box-sizing: border-box; }}
    body {{ margin: 0; font-family: 'Segoe UI', 'Helvetica Neue', sans-serif; color: var(--ink); background: var(--bg); }}
    .wrap {{ max-width: 1280px; margin: 0 auto; padding: 1rem; }}
    h1 {{ margin: 0.1rem 0 0.25rem; font-size: 1.8rem; }}
    .meta {{ color: var(--muted); font-size: 0.95rem; margin-bottom: 0.8rem; }}
    .tabs {{ display: flex; flex-wrap: wrap; gap: 0.5rem; margin: 0.75rem 0; }}
    .tab-btn {{ border: 1px solid var(--line); background: #fff; padding: 0.45rem 0.75rem; cursor: pointer; border-radius: 8px; font-weight: 600; }}
    .tab-btn.active {{ background: var(--brand); color: #fff; border-color: var(--brand); }}
    .tab {{ display: none; }}
    .tab.active {{ display: block; }}
    .panel {{ background: var(--panel); border: 1px solid var(--line); border-radius: 12px; padding: 0.85rem; margin-bottom: 0.85rem; }}
    .grid {{ display: grid; gap: 0.75rem; grid-template-columns: repeat(auto-fit, minmax(320px, 1fr)); }}
    .cards {{ display: grid; gap: 0.6rem; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); }}
    .card {{ background: #fff; border: 1px solid var(--line); border-radius: 12px; padding: 0.75rem; }}
    .card .k {{ color: var(--muted); font-size: 0.8rem; text-transform: uppercase; letter-spacing: 0.03em; }}
    .card .v {{ font-size: 1.4rem; font-weight: 700; margin-top: 0.3rem; }}
    .card .n {{ color: var(--muted); font-size: 0.85rem; margin-top: 0.2rem; }}
    .card.ok .v {{ color: var(--ok); }}
    .card.warn .v {{ color: var(--warn); }}
    canvas {{ width: 100%; height: 320px; display: block; background: #fff; border: 1px solid var(--line); border-radius: 10px; }}
    table {{ border-collapse: collapse; width: 100%; font-size: 0.9rem; }}
    th, td {{ border: 1px solid var(--line); padding: 0.35rem 0.45rem; text-align: right; }}
    th:first-child, td:first-child {{ text-align: left; }}
    .shortfall {{ background: #fee2e2; color: var(--warn); font-weight: 700; }}
    .retirement {{ border-top: 2px solid var(--brand); }}
    .advice {{ white-space: pre-line; line-height: 1.5; }}
    .subtle {{ color: var(--muted); font-size: 0.85rem; }}
    @media (max-width: 700px) {{
      h1 {{ font-size: 1.4rem; }}
      canvas {{ height: 240px; }}
    }}
  </style>
</head>
<body>
  <div class=\"wrap\">
    <h1>{title}</h1>
    <div class=\"meta\">{subtitle}</div>
    <div class=\"tabs\" id=\"tabs\">
      <button class=\"tab-btn active\" data-tab=\"dashboard\">Dashboard</button>
      <button class=\"tab-btn\" data-tab=\"income\">Income Sources</button>
      <button class=\"tab-btn\" data-tab=\"tables\">Tables</button>
      <button class=\"tab-btn\" data-tab=\"assets\">Assets</button>
      <button class=\"tab-btn\" data-tab=\"validation\">Validation</button>
      <button class=\"tab-btn\" data-tab=\"advisor\">Advisor</button>
    </div>

    <section class=\"tab active\" id=\"tab-dashboard\">
      <div class=\"cards\">{dashboard_cards}</div>
      <div class=\"panel\"><canvas id=\"chart-income-balance\"></canvas></div>
      <div class=\"panel\"><canvas id=\"chart-asset-stack\"></canvas></div>
    </section>

    <section class=\"tab\" id=\"tab-income\">
      <div class=\"panel\">{income_table}</div>
    </section>

    <section class=\"tab\" id=\"tab-tables\">
      <div class=\"panel\">{annual_table}</div>
    </section>

    <section class=\"tab\" id=\"tab-assets\">
      <div class=\"panel\">{asset_table}</div>
    </section>

    <section class=\"tab\" id=\"tab-validation\">
      <div class=\"panel\">{validation_table}</div>
    </section>

    <section class=\"tab\" id=\"tab-advisor\">
      <div class=\"panel\">{advisor_panel}</div>
    </section>
  </div>

  <script>
    const payload = {payload_json};
    const palette = ['#8884d8', '#82ca9d', '#ffc658', '#ff8042', '#0088fe', '#00c49f'];
    const shortageColor = '#ef4444';

    function fmtMoney(v) {{
      return '$' + (Number(v || 0)).toLocaleString(undefined, {{ maximumFractionDigits: 0 }});
    }}

    function tabsInit() {{
      const buttons = [...document.querySelectorAll('.tab-btn')];
      buttons.forEach((btn) => {{
        btn.addEventListener('click', () => {{
          buttons.forEach((b) => b.classList.remove('active'));
          btn.classList.add('active');
          [...document.querySelectorAll('.tab')].forEach((tab) => tab.classList.remove('active'));
          document.getElementById(`tab-${{btn.dataset.tab}}`).classList.add('active');
          renderAll();
        }});
      }});
    }}

    function prepare(canvasId) {{
      const c = document.getElementById(canvasId); if (!c) return null;
      const rect = c.getBoundingClientRect(); c.width = Math.max(380, Math.floor(rect.width)); c.height = Math.max(200, Math.floor(rect.height));
      const ctx = c.getContext('2d');
      ctx.clearRect(0, 0, c.width, c.height);
      ctx.strokeStyle = '#ddd'; ctx.lineWidth = 1;
      ctx.beginPath(); ctx.moveTo(56, 10); ctx.lineTo(56, c.height - 24); ctx.lineTo(c.width - 8, c.height - 24); ctx.stroke();
      return {{ ctx, w: c.width, h: c.height }};
    }}

    function xAt(i, n, w) {{
      return 60 + i * (w - 76) / Math.max(1, n);
    }}

    function drawIncomeAndBalance() {{
      const area = prepare('chart-income-balance'); if (!area) return;
      const {{ ctx, w, h }} = area;
      const ages = payload.charts.ages;
      const stacks = payload.charts.incomeSources;
      const ids = Object.keys(stacks);
      const totals = ages.map((_, i) => ids.reduce((s, id) => s + Math.max(0, Number(stacks[id].values[i] || 0)), 0));
      const balances = payload.charts.portfolioBalance.map(Number);
      const maxBar = Math.max(1, ...totals);
      const maxBal = Math.max(1, ...balances);
      const bw = Math.max(2, (w - 80) / Math.max(1, ages.length) - 1);
      ages.forEach((age, i) => {{
        let top = h - 24;
        ids.forEach((id, idx) => {{
          const v = Number(stacks[id].values[i] || 0);
          if (v <= 0) return;
          const bh = (v / maxBar) * (h - 48);
          ctx.fillStyle = name === 'Income Shortage' ? shortageColor : palette[idx % palette.length];
          ctx.fillRect(xAt(i, ages.length, w), top - bh, bw, bh);
          top -= bh;
        }});
        if (age === payload.charts.retirementAge) {{
          ctx.strokeStyle = '#4f46e5'; ctx.setLineDash([4, 4]);
          ctx.beginPath(); ctx.moveTo(xAt(i, ages.length, w), 14); ctx.lineTo(xAt(i, ages.length, w), h - 24); ctx.stroke();
          ctx.setLineDash([]);
        }}
      }});
      ctx.strokeStyle = '#4f46e5'; ctx.lineWidth = 2; ctx.beginPath();
      balances.forEach((v, i) => {{
        const x = xAt(i, ages.length, w) + bw / 2;
        const y = (h - 24) - (Math.max(0, v) / maxBal) * (h - 48);
        if (i === 0) ctx.moveTo(x, y); else ctx.lineTo(x, y);
      }});
      ctx.stroke();
      ctx.fillStyle = '#111'; ctx.font = 'bold 12px sans-serif'; ctx.fillText('Income Sources & Portfolio Balance', 62, 22);
      ctx.fillStyle = '#666'; ctx.font = '11px sans-serif';
      ctx.fillText(String(ages[0] ?? ''), 56, h - 8);
      ctx.fillText(String(ages[ages.length - 1] ?? ''), w - 40, h - 8);
      ctx.fillText(fmtMoney(maxBal), 4, 20);
      let lx = 62;
      names.forEach((name, idx) => {{
        ctx.fillStyle = name === 'Income Shortage' ? shortageColor : palette[idx % palette.length];
        ctx.fillRect(lx, 30, 10, 10);
        ctx.fillStyle = '#374151'; ctx.fillText(name, lx + 14, 39);
        lx += ctx.measureText(name).width + 30;
      }});
    }}

    function drawAssetStack() {{
      const area = prepare('chart-asset-stack'); if (!area) return;
      const {{ ctx, w, h }} = area;
      const ages = payload.charts.ages;
      const stacks = payload.charts.assetBalances;
      const ids = Object.keys(stacks);
      const totals = ages.map((_, i) => ids.reduce((s, id) => s + Math.max(0, Number(stacks[id].values[i] || 0)), 0));
      const maxV = Math.max(1, ...totals);
      const bw = Math.max(2, (w - 80) / Math.max(1, ages.length) - 1);
      ages.forEach((_, i) => {{
        let top = h - 24;
        ids.forEach((id, idx) => {{
          const v = Number(stacks[id].values[i] || 0);
          if (v <= 0) return;
          const bh = (v / maxV) * (h - 48);
          ctx.fillStyle = palette[(idx + 2) % palette.length];
          ctx.fillRect(xAt(i, ages.length, w), top - bh, bw, bh);
          top -= bh;
        }});
      }});
      ctx.fillStyle = '#111'; ctx.font = 'bold 12px sans-serif'; ctx.fillText('Balance by Asset', 62, 22);
      ctx.fillStyle = '#666'; ctx.font = '11px sans-serif'; ctx.fillText(fmtMoney(maxV), 4, 20);
      let lx = 62;
      ids.forEach((id, idx) => {{
        const label = stacks[id].label;
        ctx.fillStyle = palette[(idx + 2) % palette.length];
        ctx.fillRect(lx, 30, 10, 10);
        ctx.fillStyle = '#374151'; ctx.fillText(label, lx + 14, 39);
        lx += ctx.measureText(label).width + 30;
      }});
    }}

    function renderAll() {{
      drawIncomeAndBalance();
      drawAssetStack();
    }}

    tabsInit();
    renderAll();
    addEventListener('resize', () => renderAll());
  </script>
</body>
</html>
"""
