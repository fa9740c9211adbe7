"""Scene analysis prompt templates.

Contains prompts for:
- SCENE_ANALYZER_SYSTEM: System instruction for the visual analyst persona
- SCENE_ANALYZER_V1: Extraction of elements, style, mood and color scheme
"""

SCENE_ANALYZER_SYSTEM = (
    "You are a professional cinematographer and visual analyst. "
    "Extract visual elements from scene descriptions. Respond with valid JSON only."
)

# Scene Analyzer prompt
# Template placeholders: {scene_description}, {styles}
SCENE_ANALYZER_V1 = """Analyze the following scene description and extract key visual elements.

Return a JSON object with this exact structure:
{{
  "elements": [
    {{
      "type": "character" | "location" | "object",
      "description": "short visual description, 1-4 words",
      "importance": number between 0 and 1,
      "attributes": {{
        "relevant attributes such as age, gender, color, size"
      }}
    }}
  ],
  "style": "one of: {styles}",
  "mood": "emotional tone of the scene, one word",
  "colorScheme": ["primary color", "secondary color", "accent color"]
}}

RULES:
1. List the most visually important element first
2. Use concrete, searchable nouns ("golden retriever", not "happiness")
3. Only include attributes that are stated or strongly implied
4. Use lowercase for style and mood

Scene description: "{scene_description}"

Respond with ONLY the JSON, no other text."""
