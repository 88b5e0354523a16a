"""Modal application for Structify.

This is the entry point for deploying to Modal.

Run on Modal: modal serve modal_app.py  # Runs on Modal cloud with local code mounts
Deploy:       modal deploy modal_app.py

Generator credentials (OPENAI_API_KEY or STRUCTIFY_OPENAI_API_KEY) come from
the "structify-secrets" Modal secret.
"""

import modal

app = modal.App("structify")

web_image = (
    modal.Image.debian_slim(python_version="3.11")
    .pip_install(
        "fastapi>=0.115.0",
        "pydantic>=2.6.0",
        "pydantic-settings>=2.6.0",
        "litellm>=1.64.0",
    )
    .add_local_dir(".", remote_path="/app", ignore=["tests", "**/__pycache__", ".venv"])
)


@app.function(
    image=web_image,
    secrets=[modal.Secret.from_name("structify-secrets")],
    min_containers=1,
    # Worst case: (max_retries + 1) attempts of attempt_timeout each
    timeout=600,
)
@modal.concurrent(max_inputs=100)
@modal.asgi_app()
def fastapi_app():
    """
    FastAPI web application running on Modal.

    Serves the /api/json extraction endpoint.
    """
    import os
    import sys

    os.chdir("/app")
    if "/app" not in sys.path:
        sys.path.insert(0, "/app")

    from src.main import app as fastapi_instance

    return fastapi_instance
