"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
import structlog

from architect_linter.audit.analyzer import FileAnalyzer
from architect_linter.audit.parser import SourceParser
from architect_linter.models.config import LinterConfig, load_config


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any logging configuration a test installed."""
    yield
    structlog.reset_defaults()


@pytest.fixture(scope="session")
def parser() -> SourceParser:
    """One parser for the whole session; it only holds the grammars."""
    return SourceParser()


@pytest.fixture
def analyzer(parser: SourceParser) -> FileAnalyzer:
    return FileAnalyzer(parser=parser)


@pytest.fixture
def sample_config() -> LinterConfig:
    """A layered project config with two rules."""
    return load_config({
        "max_lines_per_function": 10,
        "architecture_pattern": "Hexagonal",
        "forbidden_imports": [
            {
                "from": "/domain/",
                "to": "/infrastructure/",
                "reason": "The domain layer must not depend on infrastructure",
            },
            {"from": "/presentation/", "to": "/infrastructure/"},
        ],
    })


@pytest.fixture
def empty_rules_config() -> LinterConfig:
    return load_config({"max_lines_per_function": 20, "forbidden_imports": []})


@pytest.fixture
def ts_function():
    """Build a function declaration spanning exactly ``lines`` lines."""
    def _build(name: str, lines: int) -> str:
        body = [f"  const v{i} = {i};" for i in range(lines - 2)]
        return "\n".join([f"function {name}() {{", *body, "}"])
    return _build


@pytest.fixture
def sample_controller_code() -> str:
    """A NestJS style controller with decorators and generics."""
    return '''import { Controller, Get, Param } from "@nestjs/common";
import { UserService } from "./user.service";
import { UserRepository } from "./user.repository";

@Controller("users")
export class UserController {
  constructor(private readonly service: UserService) {}

  @Get(":id")
  async findOne<T extends object>(@Param("id") id: string): Promise<T> {
    return this.service.find<T>(id);
  }
}
'''


@pytest.fixture
def sample_domain_code() -> str:
    """A domain entity that reaches into infrastructure."""
    return '''import { Entity } from "../shared/entity";
import { Database } from "../../infrastructure/database";

export class User extends Entity {
  save(db: Database): void {
    db.insert(this);
  }
}
'''


@pytest.fixture
def write_file(tmp_path: Path):
    """Write a file below tmp_path and return its path."""
    def _write(relative: str, content: str | bytes) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path
    return _write
