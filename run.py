"""
Prosty skrypt uruchamiający backend aplikacji bankowej.
"""

import uvicorn

from bank_app.config import settings

if __name__ == "__main__":
    print("=" * 50)
    print(settings.api_title)
    print("=" * 50)
    print(f"\nAplikacja dostępna pod adresem: http://{settings.host}:{settings.port}")
    print(f"Dokumentacja API: http://{settings.host}:{settings.port}/docs")
    print("\nNaciśnij Ctrl+C aby zatrzymać serwer\n")
    print("-" * 50)

    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=False)
