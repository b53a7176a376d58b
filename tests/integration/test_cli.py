"""
CLI exit codes and output
"""

import pytest
from typer.testing import CliRunner

from viewmodel_export.cli import app

runner = CliRunner()

MODELS = """
namespace Shop.Models;

public class Customer
{
    public string Name { get; set; }
    public Tier Tier { get; set; }
}

public enum Tier { Basic, Gold = 10 }
"""


@pytest.fixture
def corpus(write_corpus):
    return write_corpus({"Customer.cs": MODELS})


class TestCli:
    """viewmodel-export command"""

    def test_export(self, corpus, output_dir):
        result = runner.invoke(app, ["-m", "Customer", "-i", str(corpus), "-o", str(output_dir)])

        assert result.exit_code == 0, result.output
        text = (output_dir / "SharedModels.ts").read_text(encoding="utf-8")
        assert "export interface ICustomer {\n    name: string;\n    tier: Tier;\n}\n" in text
        assert "    Gold = 10,\n" in text

    def test_repeated_model_option(self, corpus, output_dir):
        result = runner.invoke(
            app,
            ["--model", "Customer", "--model", "Tier", "--input-dir", str(corpus), "--output-dir", str(output_dir)],
        )

        assert result.exit_code == 0, result.output

    def test_missing_input_dir(self, tmp_path, output_dir):
        result = runner.invoke(app, ["-m", "Customer", "-i", str(tmp_path / "nope"), "-o", str(output_dir)])

        assert result.exit_code == 2

    def test_missing_required_option(self, corpus):
        result = runner.invoke(app, ["-m", "Customer", "-i", str(corpus)])

        assert result.exit_code == 2

    def test_compilation_error(self, write_corpus, output_dir):
        corpus = write_corpus(
            {
                "a/Bad.cs": "public class Bad { public int X { get; set; } }",
                "b/Bad.cs": "public class Bad { public string Y { get; set; } }",
            }
        )

        result = runner.invoke(app, ["-m", "Bad", "-i", str(corpus), "-o", str(output_dir)])

        assert result.exit_code == 1
        assert "error CS0101" in result.output
        assert not (output_dir / "SharedModels.ts").exists()

    def test_json_logging(self, corpus, output_dir):
        result = runner.invoke(
            app,
            ["-m", "Customer", "-i", str(corpus), "-o", str(output_dir), "--log-format", "json", "--log-level", "debug"],
        )

        assert result.exit_code == 0, result.output
