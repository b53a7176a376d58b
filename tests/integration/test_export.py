"""
End-to-end export over synthetic source trees
"""

import pytest
from structlog.contextvars import bind_contextvars, clear_contextvars, get_contextvars

from viewmodel_export import CompilationError, ConfigurationError, ModelExporter

ORDER = """
using System;
using System.Collections.Generic;

namespace Shop.Models
{
    public class Order
    {
        public Guid Id { get; set; }
        public List<OrderLine> Items { get; set; }
        public OrderStatus Status { get; set; }
        public decimal? Discount { get; set; }

        public decimal Total() => 0m;
    }
}
"""

ORDER_LINE = """
namespace Shop.Models;

public class OrderLine
{
    public string Sku { get; set; }
    public int Quantity;
    private int _cache;
}
"""

STATUS = """
namespace Shop.Models;

public enum OrderStatus
{
    Pending,
    Shipped = 2,
    Delivered,
}
"""

INVOICE = """
namespace Shop.Billing;

public class Invoice
{
    public InvoiceState State { get; set; }
}

public enum InvoiceState
{
    Draft = Paid,
    Paid = Draft,
}
"""

EXPECTED = """export interface IOrder {
    id: string;
    items: IOrderLine[];
    status: OrderStatus;
    discount: number;
}

export enum OrderStatus {
    Pending = 0,
    Shipped = 2,
    Delivered = 3,
}

export interface IOrderLine {
    sku: string;
    quantity: number;
}
"""


@pytest.fixture
def shop(write_corpus):
    return write_corpus(
        {
            "Models/Order.cs": ORDER,
            "Models/Lines/OrderLine.cs": ORDER_LINE,
            "Models/OrderStatus.cs": STATUS,
            "Billing/Invoice.cs": INVOICE,
            "README.md": "# Shop models\n",
        }
    )


class TestModelExporter:
    """Full pipeline"""

    def test_order_export(self, shop, output_dir, settings):
        result = ModelExporter({"Order"}, shop, output_dir, settings).export()

        assert result.path == output_dir / "SharedModels.ts"
        assert result.path.read_text(encoding="utf-8") == EXPECTED
        assert [d.identifier for d in result.declarations] == ["IOrder", "OrderStatus", "IOrderLine"]

    def test_idempotent(self, shop, output_dir, settings):
        first = ModelExporter({"Order"}, shop, output_dir, settings).export().path.read_bytes()
        second = ModelExporter({"Order"}, shop, output_dir, settings).export().path.read_bytes()

        assert first == second

    def test_unrelated_invalid_file_ignored(self, shop, output_dir, settings):
        """Files outside the closure are never compiled"""
        result = ModelExporter({"OrderStatus"}, shop, output_dir, settings).export()

        assert result.text.startswith("export enum OrderStatus {")
        assert all("Invoice" not in p for p in result.closure.paths)

    def test_compilation_error_writes_nothing(self, shop, output_dir, settings):
        with pytest.raises(CompilationError) as exc_info:
            ModelExporter({"Invoice"}, shop, output_dir, settings).export()

        assert exc_info.value.errors
        assert [d.code for d in exc_info.value.errors] == ["CS0110"]
        assert not (output_dir / "SharedModels.ts").exists()

    def test_unknown_model_writes_empty_file(self, shop, output_dir, settings):
        result = ModelExporter({"Ghost"}, shop, output_dir, settings).export()

        assert result.declarations == ()
        assert result.path.read_text(encoding="utf-8") == ""

    def test_custom_basename(self, shop, output_dir, settings):
        custom = settings.model_copy(update={"output_basename": "Api"})

        result = ModelExporter({"OrderLine"}, shop, output_dir, custom).export()

        assert result.path.name == "Api.ts"

    def test_render_does_not_write(self, shop, output_dir, settings):
        result = ModelExporter({"Order"}, shop, output_dir, settings).render()

        assert result.path is None
        assert result.text == EXPECTED
        assert list(output_dir.iterdir()) == []

    def test_empty_models_rejected(self, shop, output_dir, settings):
        with pytest.raises(ConfigurationError):
            ModelExporter(set(), shop, output_dir, settings)

    def test_missing_output_dir_rejected(self, shop, tmp_path, settings):
        with pytest.raises(ConfigurationError):
            ModelExporter({"Order"}, shop, tmp_path / "missing", settings)

    def test_generic_base_in_other_file(self, write_corpus, output_dir, settings):
        root = write_corpus(
            {
                "A/Order.cs": "public class Order : Entity<Guid> { public string Number { get; set; } }",
                "B/Entity.cs": "public abstract class Entity<TKey> { public TKey Id { get; set; } }",
            }
        )

        result = ModelExporter({"Order"}, root, output_dir, settings).export()

        assert result.text == (
            "export interface IOrder {\n    number: string;\n    id: string;\n}\n"
            "\n"
            "export interface IEntity<TKey> {\n    id: TKey;\n}\n"
        )
        assert [d.code for d in result.diagnostics] == []
        assert any(p.endswith("Entity.cs") for p in result.closure.paths)

    def test_caller_log_context_kept(self, shop, output_dir, settings):
        bind_contextvars(request_id="r-1")
        try:
            ModelExporter({"Order"}, shop, output_dir, settings).render()

            assert get_contextvars() == {"request_id": "r-1"}
        finally:
            clear_contextvars()
