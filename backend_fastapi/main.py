from backend_fastapi.app import create_app

# Punto de entrada para `uvicorn backend_fastapi.main:app`.
app = create_app()
