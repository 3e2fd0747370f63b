"""Prompt for menu item extraction and health scoring."""

MENU_EXTRACTION_PROMPT = """IMPORTANT: Extract EVERY menu item visible in this image. Do not skip any items.

Carefully scan the ENTIRE menu from top to bottom, left to right. Include ALL:
- Appetizers, starters, soups, salads
- Main courses, entrees, sandwiches, burgers
- Sides, extras, add-ons
- Desserts, drinks, beverages
- Any specials or featured items

For EACH item found:
1. Item name (exactly as shown)
2. Description if visible (or null)
3. Health score 1-10 (10 = healthiest)
4. Brief health reason
5. Estimated calories (or null)

Health scoring factors:
- Cooking method (fried=lower, grilled/steamed=higher)
- Vegetables and lean proteins = higher
- Heavy cream, butter, fried foods = lower
- Large portions = lower

Respond ONLY with a JSON array. Format:
[{"name": "Item", "description": null, "healthScore": 7, "healthReason": "reason", "calories": null}]

Return [] only if the image is unreadable. Otherwise, extract EVERYTHING visible."""
