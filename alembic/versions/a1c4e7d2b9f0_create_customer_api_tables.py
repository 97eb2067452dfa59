"""create customer api tables

Revision ID: a1c4e7d2b9f0
Revises:
Create Date: 2026-10-19

Customers, their generic attributes and addresses, plus the store,
language, currency, newsletter and locale resource tables they reference.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = 'a1c4e7d2b9f0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _has_table(table_name):
    bind = op.get_bind()
    insp = inspect(bind)
    return table_name in insp.get_table_names()


def upgrade() -> None:
    # ── addresses ──
    if not _has_table('addresses'):
        op.create_table(
            'addresses',
            sa.Column('id', sa.Integer(), primary_key=True, index=True),
            sa.Column('first_name', sa.String(), nullable=True),
            sa.Column('last_name', sa.String(), nullable=True),
            sa.Column('email', sa.String(), nullable=True),
            sa.Column('company', sa.String(), nullable=True),
            sa.Column('country', sa.String(), nullable=True),
            sa.Column('state_province', sa.String(), nullable=True),
            sa.Column('county', sa.String(), nullable=True),
            sa.Column('city', sa.String(), nullable=True),
            sa.Column('address1', sa.String(), nullable=True),
            sa.Column('address2', sa.String(), nullable=True),
            sa.Column('zip_postal_code', sa.String(), nullable=True),
            sa.Column('phone_number', sa.String(), nullable=True),
            sa.Column('fax_number', sa.String(), nullable=True),
            sa.Column('created_on_utc', sa.DateTime(), server_default=sa.func.now()),
        )

    # ── customers ──
    if not _has_table('customers'):
        op.create_table(
            'customers',
            sa.Column('id', sa.Integer(), primary_key=True, index=True),
            sa.Column('customer_guid', sa.String(36), nullable=True),
            sa.Column('username', sa.String(), nullable=True, index=True),
            sa.Column('email', sa.String(), nullable=True, index=True),
            sa.Column('first_name', sa.String(), nullable=True),
            sa.Column('last_name', sa.String(), nullable=True),
            sa.Column('company', sa.String(), nullable=True),
            sa.Column('phone', sa.String(), nullable=True),
            sa.Column('gender', sa.String(), nullable=True),
            sa.Column('date_of_birth', sa.DateTime(), nullable=True),
            sa.Column('admin_comment', sa.Text(), nullable=True),
            sa.Column('is_tax_exempt', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('deleted', sa.Boolean(), nullable=False, server_default=sa.false(), index=True),
            sa.Column('is_system_account', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('system_name', sa.String(), nullable=True),
            sa.Column('last_ip_address', sa.String(), nullable=True),
            sa.Column('registered_in_store_id', sa.Integer(), nullable=False, server_default='0', index=True),
            sa.Column('language_id', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('currency_id', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('billing_address_id', sa.Integer(), sa.ForeignKey('addresses.id'), nullable=True),
            sa.Column('shipping_address_id', sa.Integer(), sa.ForeignKey('addresses.id'), nullable=True),
            sa.Column('created_on_utc', sa.DateTime(), server_default=sa.func.now(), index=True),
            sa.Column('last_login_date_utc', sa.DateTime(), nullable=True),
            sa.Column('last_activity_date_utc', sa.DateTime(), nullable=True),
        )

    # ── generic_attributes ──
    if not _has_table('generic_attributes'):
        op.create_table(
            'generic_attributes',
            sa.Column('id', sa.Integer(), primary_key=True, index=True),
            sa.Column('entity_id', sa.Integer(), nullable=False, index=True),
            sa.Column('key_group', sa.String(400), nullable=False, index=True),
            sa.Column('key', sa.String(400), nullable=False),
            sa.Column('value', sa.Text(), nullable=True),
            sa.Column('store_id', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('created_or_updated_date_utc', sa.DateTime(), server_default=sa.func.now()),
        )

    # ── customer_address_mappings ──
    if not _has_table('customer_address_mappings'):
        op.create_table(
            'customer_address_mappings',
            sa.Column('id', sa.Integer(), primary_key=True, index=True),
            sa.Column('customer_id', sa.Integer(), sa.ForeignKey('customers.id'), nullable=False, index=True),
            sa.Column('address_id', sa.Integer(), sa.ForeignKey('addresses.id'), nullable=False, index=True),
        )

    # ── stores / store_mappings ──
    if not _has_table('stores'):
        op.create_table(
            'stores',
            sa.Column('id', sa.Integer(), primary_key=True, index=True),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('url', sa.String(), nullable=True),
            sa.Column('hosts', sa.String(), nullable=True),
            sa.Column('default_language_id', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        )

    if not _has_table('store_mappings'):
        op.create_table(
            'store_mappings',
            sa.Column('id', sa.Integer(), primary_key=True, index=True),
            sa.Column('entity_id', sa.Integer(), nullable=False, index=True),
            sa.Column('entity_name', sa.String(400), nullable=False),
            sa.Column('store_id', sa.Integer(), nullable=False, index=True),
        )

    # ── languages / currencies ──
    if not _has_table('languages'):
        op.create_table(
            'languages',
            sa.Column('id', sa.Integer(), primary_key=True, index=True),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('language_culture', sa.String(20), nullable=False),
            sa.Column('unique_seo_code', sa.String(2), nullable=True),
            sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('limited_to_stores', sa.Boolean(), nullable=False, server_default=sa.false()),
        )

    if not _has_table('currencies'):
        op.create_table(
            'currencies',
            sa.Column('id', sa.Integer(), primary_key=True, index=True),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('currency_code', sa.String(5), nullable=False),
            sa.Column('rate', sa.Numeric(18, 4), server_default='1'),
            sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        )

    # ── newsletter_subscriptions ──
    if not _has_table('newsletter_subscriptions'):
        op.create_table(
            'newsletter_subscriptions',
            sa.Column('id', sa.Integer(), primary_key=True, index=True),
            sa.Column('newsletter_subscription_guid', sa.String(36), nullable=True),
            sa.Column('email', sa.String(), nullable=True, index=True),
            sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('store_id', sa.Integer(), nullable=False, index=True),
            sa.Column('created_on_utc', sa.DateTime(), server_default=sa.func.now()),
        )

    # ── locale_string_resources ──
    if not _has_table('locale_string_resources'):
        op.create_table(
            'locale_string_resources',
            sa.Column('id', sa.Integer(), primary_key=True, index=True),
            sa.Column('language_id', sa.Integer(), nullable=False, index=True),
            sa.Column('resource_name', sa.String(200), nullable=False, index=True),
            sa.Column('resource_value', sa.Text(), nullable=False),
        )


def downgrade() -> None:
    for table_name in (
        'locale_string_resources',
        'newsletter_subscriptions',
        'currencies',
        'languages',
        'store_mappings',
        'stores',
        'customer_address_mappings',
        'generic_attributes',
        'customers',
        'addresses',
    ):
        if _has_table(table_name):
            op.drop_table(table_name)
