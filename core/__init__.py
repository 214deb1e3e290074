"""
Core translation pipeline for Translation Hub.

Modules:
    models        - request/result/job data model
    exceptions    - ErrorKind taxonomy and typed errors
    language      - language catalogue and provider codes
    extractor     - document -> plain text
    reconstructor - translated text -> document
    orchestrator  - provider selection and fallback
    session       - debounced interactive translation
    history       - in-process translation history
    file_io       - FileReader / ArtifactSink capabilities
"""
