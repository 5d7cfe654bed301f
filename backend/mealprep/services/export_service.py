import io
import logging
from typing import Any, List, Union
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from mealprep.schemas.meal_plan import DraftPlan, PersistedPlan
from mealprep.services import nutrition_service
from mealprep.services.plan_view import grocery_summary

logger = logging.getLogger(__name__)

TITLE = "Weekly Meal Prep Plan"

_TABLE_STYLE = TableStyle([
    ('GRID', (0, 0), (-1, -1), 0.4, colors.grey),
    ('BACKGROUND', (0, 0), (-1, 0), colors.lightgrey),
    ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
    ('VALIGN', (0, 0), (-1, -1), 'TOP'),
])


def _fmt(value: float) -> str:
    return str(round(value))


def _price(value: float) -> str:
    return f"{value:,.0f}"


def render_plan_pdf(source: Union[PersistedPlan, DraftPlan]) -> bytes:
    """
    Renders either plan source to a PDF:
    weekly summary, one meal table per day, then the grocery list grouped by
    category with a summary of total items and estimated total.
    """
    plan = source.plan
    summary = nutrition_service.weekly_summary(plan.days)

    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, title=TITLE)
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name='Small', fontSize=9, leading=11))
    story: List[Any] = []

    story.append(Paragraph(f"<b>{TITLE}</b>", styles['Title']))
    if isinstance(source, PersistedPlan):
        story.append(Paragraph(f"Plan {source.plan_id}", styles['Small']))
    avg = summary.averages
    story.append(Paragraph(
        f"Daily average: {_fmt(avg.calories)} kcal, {_fmt(avg.protein)}P / {_fmt(avg.carbs)}C / {_fmt(avg.fats)}F (g)",
        styles['Normal']
    ))
    pct = summary.macro_percentages
    story.append(Paragraph(
        f"Macro split: {pct['protein']}% protein, {pct['carbs']}% carbs, {pct['fats']}% fat "
        f"over {summary.days} days ({_fmt(summary.totals.calories)} kcal total)",
        styles['Normal']
    ))
    story.append(Spacer(1, 0.2 * inch))

    for day in plan.days:
        totals = nutrition_service.compute_day_totals(day)
        story.append(Paragraph(f"<b>Day {day.day}</b> (~{_fmt(totals.calories)} kcal)", styles['Heading2']))
        rows = [["Meal", "Recipe", "kcal", "P", "C", "F"]]
        slots = [("Breakfast", day.meals.breakfast), ("Lunch", day.meals.lunch), ("Dinner", day.meals.dinner)]
        slots += [("Snack", snack) for snack in day.meals.snacks]
        for label, meal in slots:
            if meal is None:
                continue
            name = meal.recipe_name + (" (swapped)" if meal.is_swapped else "")
            rows.append([label, Paragraph(escape(name), styles['Small']), _fmt(meal.calories),
                         _fmt(meal.protein), _fmt(meal.carbs), _fmt(meal.fats)])
        table = Table(rows, hAlign='LEFT',
                      colWidths=[0.9 * inch, 3.3 * inch, 0.7 * inch, 0.5 * inch, 0.5 * inch, 0.5 * inch])
        table.setStyle(_TABLE_STYLE)
        story.append(table)
        story.append(Spacer(1, 0.2 * inch))

    groceries = grocery_summary(plan.grocery_list)
    story.append(PageBreak())
    story.append(Paragraph("<b>Grocery List</b>", styles['Heading2']))
    for category, items in groceries["categories"].items():
        story.append(Paragraph(f"<b>{escape(category)}</b>", styles['Normal']))
        rows = [["Item", "Quantity", "Est. price"]]
        for item in items:
            name = ("[x] " if item.is_bought else "") + item.ingredient_name
            rows.append([Paragraph(escape(name), styles['Small']), item.quantity, _price(item.estimated_price)])
        table = Table(rows, hAlign='LEFT', colWidths=[3.4 * inch, 1.5 * inch, 1.2 * inch])
        table.setStyle(_TABLE_STYLE)
        story.append(table)
        story.append(Spacer(1, 0.1 * inch))

    story.append(Spacer(1, 0.2 * inch))
    story.append(Paragraph(f"Total items: {groceries['total_items']}", styles['Normal']))
    story.append(Paragraph(f"Estimated total: {_price(groceries['estimated_total'])}", styles['Normal']))

    doc.build(story)
    logger.info(f"Rendered PDF for {len(plan.days)} days, {groceries['total_items']} grocery items")
    return buf.getvalue()
