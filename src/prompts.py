MATCHUP_SYSTEM_PROMPT = """You are a world-class League of Legends analyst and mathematician.
You answer with one JSON object inside a ```json code block and nothing the reader needs outside it."""

MATCHUP_ANALYSIS_PROMPT = """Analyze the matchup: {champion} (me) vs {opponent} (enemy) in the {role} role.

Use the latest available data (current patch).

Your goal is to provide a MATHEMATICALLY OPTIMIZED build and strategy.

IMPORTANT: For Item and Rune names, use the exact English names as they appear in the game
(e.g. "Blade of the Ruined King" not "BORK", "Press the Attack" not "PTA") so they can be mapped to icons programmatically.

Output a strictly valid JSON object inside a markdown code block (```json ... ```).
The JSON must match this structure exactly:
{{
  "champion": "{champion}",
  "opponent": "{opponent}",
  "role": "{role}",
  "patch": "string (e.g. 14.x or 15.x)",
  "winRatePrediction": "string (e.g. 48%)",
  "runes": {{
    "keystone": "string",
    "primaryTree": ["string", "string", "string"],
    "secondaryTree": ["string", "string"],
    "shards": ["string", "string", "string"],
    "explanation": "string (Explain using numbers why this is optimal, e.g. damage values, cooldowns)"
  }},
  "build": {{
    "starting": [{{"name": "string", "reason": "string (math based)"}}],
    "core": [{{"name": "string", "reason": "string (math/gold efficiency)"}}],
    "situational": [{{"name": "string", "reason": "string"}}],
    "explanation": "string (General build math)"
  }},
  "skills": {{
    "maxOrder": ["string (e.g. Q)", "string", "string"],
    "explanation": "string (Why max this first? Cite base damage increases per rank vs scaling)"
  }},
  "mathAnalysis": {{
    "tradingPattern": "string (How to trade based on CD and range)",
    "efficiencyStats": "string (Specific stats like Gold Efficiency or DPS comparisons)"
  }},
  "powerCurve": [
    {{"time": 0, "myPower": number (0-100), "enemyPower": number (0-100)}},
    {{"time": 5, "myPower": number, "enemyPower": number}},
    {{"time": 10, "myPower": number, "enemyPower": number}},
    {{"time": 15, "myPower": number, "enemyPower": number}},
    {{"time": 20, "myPower": number, "enemyPower": number}},
    {{"time": 25, "myPower": number, "enemyPower": number}},
    {{"time": 30, "myPower": number, "enemyPower": number}},
    {{"time": 35, "myPower": number, "enemyPower": number}}
  ]
}}

Make sure the reasoning is heavy on MATH and DATA
(e.g., "BotRK deals 12% current HP which is better than X lethality against this HP stacker").
"""
