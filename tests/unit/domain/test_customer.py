"""Unit tests for Customer and SalesDocument entities"""

from decimal import Decimal

from src.domain.customer import BalanceType
from src.domain.sales_document import DocumentStatus, DocumentType
from tests.fixtures.factories import make_customer, make_invoice


class TestSignedOpeningBalance:
    """Opening balance sign follows opening_balance_type"""

    def test_debit_opening_balance_is_positive(self):
        customer = make_customer(opening_balance="200", opening_balance_type=BalanceType.DEBIT)

        assert customer.signed_opening_balance == Decimal("200")

    def test_credit_opening_balance_is_negative(self):
        customer = make_customer(opening_balance="300", opening_balance_type=BalanceType.CREDIT)

        assert customer.signed_opening_balance == Decimal("-300")

    def test_zero_opening_balance(self):
        customer = make_customer(opening_balance="0", opening_balance_type=BalanceType.CREDIT)

        assert customer.signed_opening_balance == Decimal("0")


class TestSalesDocumentAmounts:
    """Outstanding and settled amounts of an invoice"""

    def test_balance_amount_wins_when_present(self):
        invoice = make_invoice(total="1000", paid="100", balance="400")

        assert invoice.outstanding_amount == Decimal("400")
        assert invoice.settled_amount == Decimal("600")

    def test_outstanding_derived_from_total_minus_paid(self):
        invoice = make_invoice(total="1000", paid="400", balance=None)

        assert invoice.outstanding_amount == Decimal("600")
        assert invoice.settled_amount == Decimal("400")

    def test_missing_numbers_count_as_zero(self):
        invoice = make_invoice(total=None, paid=None, balance=None)

        assert invoice.outstanding_amount == Decimal("0")
        assert invoice.settled_amount == Decimal("0")

    def test_missing_paid_amount(self):
        invoice = make_invoice(total="250", paid=None, balance=None)

        assert invoice.outstanding_amount == Decimal("250")


class TestCountsTowardBalance:
    """Only posted invoices affect the balance"""

    def test_issued_invoice_counts(self):
        assert make_invoice(total="100", status=DocumentStatus.ISSUED).counts_toward_balance

    def test_non_posting_statuses_do_not_count(self):
        for status in (DocumentStatus.DRAFT, DocumentStatus.CANCELLED, DocumentStatus.VOID):
            invoice = make_invoice(total="100", status=status)
            assert not invoice.counts_toward_balance, status

    def test_other_document_types_do_not_count(self):
        for document_type in (DocumentType.QUOTATION, DocumentType.SALES_ORDER, DocumentType.CREDIT_NOTE):
            document = make_invoice(total="100", document_type=document_type)
            assert not document.counts_toward_balance, document_type
