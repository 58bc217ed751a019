"""
GhostWriter Test Suite.

Test modules:
- test_config: Configuration and request model validation
- test_markdown_content: Directive splitting and line classification
- test_generation_client: Request construction, response parsing, credential retry
- test_session: Outcome state machine and phase timer
- test_credentials: Key selectors
- test_export: Clipboard and display formatting
- test_style_check: Advisory style checker
"""
