"""
Spanish Profesor Core.

Question-answering pipeline modules:

1. INTENT (intent/)
   - Classifies questions → IntentTag (ordered pattern rules)
   - Augments the question with tag-specific instructions

2. TOOLS (tools/)
   - ToolSpec registry: name, description, input schema, invoke
   - Conjugation, phonetics, number words, web search

3. TOOL VALIDATION (tool_validation/)
   - Schema + range validation of backend-supplied arguments

4. ORCHESTRATOR (orchestrator.py)
   - Bounded reason → tool call → observe loop against the LLM backend

5. ASSEMBLER (assembler.py)
   - Normalises the final text / failures into the response contract

Main entrypoint: run_pipeline() from pipeline.py
"""
