from __future__ import annotations

from setuptools import find_namespace_packages, setup

setup(
    name="neo4j-memory-builder",
    version="0.1.0",
    # Repo convention: backend code lives under `backend/`.
    # The distributable carries the memory_graph core plus the FastAPI service
    # layers (`server`, `application`, `domain`, `infrastructure`, `config`).
    package_dir={"": "backend"},
    # Service layers are namespace packages (no `__init__.py`), so use the namespace finder.
    packages=find_namespace_packages(
        where="backend",
        include=[
            "memory_graph*",
            "application*",
            "domain*",
            "infrastructure*",
            "config*",
            "server*",
        ],
    ),
    package_data={"server": ["static/*.yaml", "static/.well-known/*"]},
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.29",
        "pydantic>=2.6",
        "neo4j>=5.14",
        "python-dotenv>=1.0",
    ],
    extras_require={
        # Tests use unittest + fastapi's TestClient (httpx-backed); pytest as runner.
        "test": ["pytest>=8.0", "httpx>=0.27"],
    },
    entry_points={
        "console_scripts": [
            "neo4j-memory-builder=server.main:run",
        ],
    },
)
