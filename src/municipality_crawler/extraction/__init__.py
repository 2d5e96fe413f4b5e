# ABOUTME: Data extraction from external sources (Wikipedia, Gemini text model)
# ABOUTME: Pipeline Stage 1: index page -> article pages -> structured municipality facts

"""
Extraction Layer: Get municipality data from external sources

This layer handles:
- Fetching and parsing the municipality index page
- Reading infobox and article text from each municipality page
- Asking the text model for structured facts and resolving image file pages

Data Flow: Wikipedia -> Gemini text model -> MunicipalityRecord
"""
