"""
Closure builder: fixed point over a corpus
"""

from pathlib import Path

import pytest

from viewmodel_export.closure import ClosureBuilder, DependencyVisitor
from viewmodel_export.corpus import SourceCorpus
from viewmodel_export.exceptions import ConfigurationError

ORDER = """
namespace Shop.Models;

public class Order
{
    public Guid Id { get; set; }
    public Models.Address ShipTo { get; set; }
    public List<OrderLine> Items { get; set; }
}
"""

ADDRESS = """
namespace Shop.Models;

public class Address
{
    public string City { get; set; }
    public Country Country { get; set; }
}
"""

ORDER_LINE = """
namespace Shop.Models;

public class OrderLine
{
    public string Sku { get; set; }
    public int Quantity { get; set; }
}
"""

COUNTRY = """
namespace Shop.Models;

public enum Country { NL, BE }
"""

UNRELATED = """
public class Invoice { public decimal Total { get; set; } }
"""


def _build(root, models):
    return ClosureBuilder(SourceCorpus.discover(root)).build(models)


class TestClosureBuilder:
    """Fixed-point closure"""

    def test_two_file_address_scenario(self, write_corpus):
        """Order references Models.Address; Address is defined in a second file"""
        root = write_corpus({"Address.cs": ADDRESS, "Order.cs": ORDER})

        result = _build(root, {"Order"})

        assert {"Order", "Guid", "Models.Address", "Address", "string"} <= result.wanted
        assert sorted(p.rsplit("/", 1)[-1] for p in result.paths) == ["Address.cs", "Order.cs"]

    def test_transitive_closure_across_directories(self, write_corpus):
        root = write_corpus(
            {
                "a/Order.cs": ORDER,
                "b/Address.cs": ADDRESS,
                "b/OrderLine.cs": ORDER_LINE,
                "c/Country.cs": COUNTRY,
                "d/Invoice.cs": UNRELATED,
            }
        )

        result = _build(root, {"Order"})

        assert {"OrderLine", "Country", "int"} <= result.wanted
        assert "Invoice" not in result.wanted
        assert len(result.units) == 4

    def test_membership_independent_of_order(self, write_corpus, tmp_path):
        files = {"Order.cs": ORDER, "Address.cs": ADDRESS, "OrderLine.cs": ORDER_LINE, "Country.cs": COUNTRY}
        root = write_corpus(files)
        corpus = SourceCorpus.discover(root)

        forward = ClosureBuilder(corpus).build({"Order"})
        backward = ClosureBuilder(SourceCorpus.of(list(reversed(corpus.paths)))).build({"Order"})

        assert forward.wanted == backward.wanted
        assert set(forward.paths) == set(backward.paths)

    def test_fixed_point(self, write_corpus):
        root = write_corpus({"Order.cs": ORDER, "Address.cs": ADDRESS, "OrderLine.cs": ORDER_LINE})

        result = _build(root, {"Order"})

        for unit in result.units:
            assert DependencyVisitor.collect(result.wanted, unit) <= result.wanted

    def test_missing_seed_terminates_empty(self, write_corpus):
        root = write_corpus({"Invoice.cs": UNRELATED})

        result = _build(root, {"Ghost"})

        assert result.wanted == frozenset({"Ghost"})
        assert result.units == ()

    def test_empty_seed_rejected(self, write_corpus):
        root = write_corpus({"Invoice.cs": UNRELATED})

        with pytest.raises(ConfigurationError):
            _build(root, set())

    def test_files_parsed_once(self, write_corpus):
        from viewmodel_export.parsing.unit import ParsedUnit

        root = write_corpus({"Order.cs": ORDER, "Address.cs": ADDRESS, "OrderLine.cs": ORDER_LINE})
        calls = []

        def counting_parse(path):
            calls.append(path)
            return ParsedUnit.parse(path)

        ClosureBuilder(SourceCorpus.discover(root), parse=counting_parse).build({"Order"})

        assert len(calls) == len(set(calls)) == 3

    def test_unreadable_file_skipped(self, write_corpus):
        root = write_corpus({"Order.cs": ORDER})
        corpus = SourceCorpus.of([*SourceCorpus.discover(root).paths, str(root / "missing.cs")])

        result = ClosureBuilder(corpus).build({"Order"})

        assert len(result.units) == 1


class TestSourceCorpus:
    """Deterministic enumeration"""

    def test_files_before_directories(self, write_corpus):
        root = write_corpus({"b.cs": "", "a.cs": "", "sub/c.cs": "", "notes.txt": ""})

        names = [Path(p).relative_to(root.resolve()).as_posix() for p in SourceCorpus.discover(root)]

        assert names == ["a.cs", "b.cs", "notes.txt", "sub/c.cs"]

    def test_missing_root_rejected(self, tmp_path):
        with pytest.raises(ConfigurationError):
            SourceCorpus.discover(tmp_path / "nope")
