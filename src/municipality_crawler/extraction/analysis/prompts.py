# ABOUTME: Prompt templates for the Gemini fact extraction call
# ABOUTME: Encodes the infobox heuristics (photo vs. coat of arms) as natural-language rules

FLAG_INSTRUCTIONS = """   - The COAT OF ARMS/FLAG image:
     * Look for images labeled "Wappen", "Coat of arms", "Blason"
     * Look for filenames containing "wappen", "blason", "coat"
     * Find the parent <a> tag of the img to get the Wikipedia File page link
     * The link usually looks like /wiki/File:... or /wiki/Datei:...
"""

PHOTO_INSTRUCTIONS = """   - The best PHOTO/IMAGE (NOT coat of arms):
     * CRITICAL: Look for images labeled "Ansicht", "Luftbild", "Panorama", or similar - these are photos
     * CRITICAL: SKIP images labeled "Wappen", "Coat of arms", "Blason" - these are NOT photos
     * CRITICAL: SKIP images with filenames containing "wappen", "blason", "coat" - these are NOT photos
     * PREFER: Actual photographs showing landscapes, buildings, town views, streets, architecture
     * AVOID: Coats of arms (Wappen), flags, maps, location diagrams, symbolic images
     * Find the parent <a> tag of the img to get the Wikipedia File page link (not the thumbnail src)
     * The link usually looks like /wiki/File:... or /wiki/Datei:...
     * Return NULL if only coat of arms/Wappen images are available
"""

ARTICLE_INSTRUCTIONS = """2. From the ARTICLE CONTENT, extract:
   - Geography: Brief description of the municipality's location and geographical features (mountains, rivers, valleys, altitude, etc.) - max 100 words
   - Appearance: Brief description of how the town looks (architecture, urban/rural character, notable buildings, atmosphere) - max 100 words
   - Points of Interest: Array of notable landmarks, attractions, or places (churches, castles, museums, natural sites, etc.) - list of strings
"""  # noqa: E501


def _response_schema(extract_flag: bool) -> str:
    lines = ['  "bfsId": "the BFS number as a string",']
    if extract_flag:
        lines.append('  "flagPageUrl": "the Wikipedia File/Datei page URL for coat of arms/flag or null",')
    lines.extend(
        [
            '  "imagePageUrl": "the Wikipedia File/Datei page URL or null if no actual photo found",',
            '  "geography": "brief geography description or null",',
            '  "appearance": "brief appearance description or null",',
            '  "pointsOfInterest": ["landmark1", "landmark2"] or null',
        ]
    )
    return "{\n" + "\n".join(lines) + "\n}"


def build_extraction_prompt(infobox_html: str, article_content: str, extract_flag: bool = True) -> str:
    """Build the fact extraction prompt for one municipality article.

    Args:
        infobox_html: Inner markup of the article's infobox
        article_content: Leading article paragraphs, blank-line separated
        extract_flag: Ask for the coat of arms file page as well
    """
    infobox_rules = "1. From the INFOBOX, extract:\n   - The BFS number (BFS-Nr., Gemeindenummer, or similar)\n"
    if extract_flag:
        infobox_rules += FLAG_INSTRUCTIONS
    infobox_rules += PHOTO_INSTRUCTIONS

    return (
        "Extract the following information from this Wikipedia page for a Swiss municipality:\n\n"
        f"{infobox_rules}\n"
        f"{ARTICLE_INSTRUCTIONS}\n"
        "Return the data in JSON format:\n"
        f"{_response_schema(extract_flag)}\n\n"
        f"INFOBOX HTML:\n{infobox_html}\n\n"
        f"ARTICLE CONTENT:\n{article_content}"
    )
