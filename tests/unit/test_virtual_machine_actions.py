"""Unit tests for VirtualMachineActionsService (action -> transaction correlation)."""

from __future__ import annotations

import httpx
import pytest

from onapp_client.errors import (
    OnAppAPIError,
    OnAppArgumentError,
    OnAppTransportError,
    TransactionLookupError,
)
from onapp_client.services.virtual_machine_actions import (
    VirtualMachineAction,
    VirtualMachineActionsService,
    virtual_machine_action_path,
)


def _trx(trx_id: int, action: str, vm_id: int = 42, status: str = 'pending') -> dict:
    return {
        'transaction': {
            'id': trx_id,
            'action': action,
            'status': status,
            'associated_object_id': vm_id,
            'associated_object_type': 'VirtualMachine',
            'created_at': '2024-03-01T10:00:00.000+00:00',
        }
    }


# ── Action variants ──────────────────────────────────────────────


def test_every_action_has_a_path_body_and_label():
    for action in VirtualMachineAction:
        assert action.path
        assert action.body['type'] == action.value
        assert action.transaction_label.endswith('_virtual_server')


def test_unsuspend_posts_to_suspend_with_direction_field():
    action = VirtualMachineAction.UNSUSPEND
    assert action.path == 'suspend'
    assert action.body == {'type': 'unsuspend', 'path': 'suspend'}
    assert virtual_machine_action_path(7, action) == 'virtual_machines/7/suspend.json'


def test_other_actions_post_to_their_own_path():
    assert VirtualMachineAction.REBOOT.body == {'type': 'reboot'}
    assert virtual_machine_action_path(7, VirtualMachineAction.SHUTDOWN) == 'virtual_machines/7/shutdown.json'


def test_transaction_labels():
    assert VirtualMachineAction.SHUTDOWN.transaction_label == 'stop_virtual_server'
    assert VirtualMachineAction.STOP.transaction_label == 'stop_virtual_server'
    assert VirtualMachineAction.SUSPEND.transaction_label == 'stop_virtual_server'
    assert VirtualMachineAction.STARTUP.transaction_label == 'startup_virtual_server'
    assert VirtualMachineAction.UNSUSPEND.transaction_label == 'startup_virtual_server'
    assert VirtualMachineAction.REBOOT.transaction_label == 'reboot_virtual_server'
    assert VirtualMachineAction.UNLOCK.transaction_label == 'unlock_virtual_server'


# ── Correlation ──────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_reboot_returns_newest_matching_transaction(fake_onapp):
    fake_onapp.reply(201, {})
    fake_onapp.reply(200, [
        _trx(900, 'reboot_virtual_server'),
        _trx(800, 'reboot_virtual_server', status='complete'),
    ])
    service = VirtualMachineActionsService(fake_onapp.client())

    trx = await service.reboot(42)

    assert trx is not None
    assert trx.id == 900
    assert trx.status == 'pending'

    action_req, lookup_req = fake_onapp.requests
    assert action_req.method == 'POST'
    assert action_req.url.path == '/virtual_machines/42/reboot.json'
    assert fake_onapp.body(action_req) == {'type': 'reboot'}

    assert lookup_req.method == 'GET'
    assert lookup_req.url.path == '/transactions.json'
    params = lookup_req.url.params
    assert params['action'] == 'reboot_virtual_server'
    assert params['associated_object_id'] == '42'
    assert params['associated_object_type'] == 'VirtualMachine'
    assert params['per_page'] == '100'


@pytest.mark.asyncio
async def test_unsuspend_request_uses_suspend_path(fake_onapp):
    fake_onapp.reply(200, {})
    fake_onapp.reply(200, [_trx(5, 'startup_virtual_server')])
    service = VirtualMachineActionsService(fake_onapp.client())

    trx = await service.unsuspend(42)

    assert trx.id == 5
    action_req = fake_onapp.requests[0]
    assert action_req.url.path == '/virtual_machines/42/suspend.json'
    assert fake_onapp.body(action_req) == {'type': 'unsuspend', 'path': 'suspend'}


@pytest.mark.asyncio
async def test_lookup_page_size_comes_from_client(fake_onapp):
    fake_onapp.reply(200, {})
    fake_onapp.reply(200, [])
    service = VirtualMachineActionsService(fake_onapp.client(transaction_page_size=10))

    await service.stop(42)

    assert fake_onapp.requests[1].url.params['per_page'] == '10'


@pytest.mark.asyncio
async def test_records_not_matching_the_filter_are_skipped(fake_onapp):
    fake_onapp.reply(200, {})
    fake_onapp.reply(200, [
        _trx(11, 'reboot_virtual_server', vm_id=99),
        _trx(10, 'stop_virtual_server'),
    ])
    service = VirtualMachineActionsService(fake_onapp.client())

    trx = await service.shutdown(42)

    assert trx.id == 10


@pytest.mark.asyncio
async def test_no_matching_transaction_returns_none(fake_onapp):
    fake_onapp.reply(200, {})
    fake_onapp.reply(200, [])
    service = VirtualMachineActionsService(fake_onapp.client())

    assert await service.startup(42) is None
    assert len(fake_onapp.requests) == 2


@pytest.mark.asyncio
async def test_perform_action_accepts_action_name(fake_onapp):
    fake_onapp.reply(200, {})
    fake_onapp.reply(200, [_trx(3, 'unlock_virtual_server')])
    service = VirtualMachineActionsService(fake_onapp.client())

    trx = await service.perform_action(42, 'unlock')

    assert trx.id == 3
    assert fake_onapp.requests[0].url.path == '/virtual_machines/42/unlock.json'


# ── Failure semantics ────────────────────────────────────────────


@pytest.mark.asyncio
@pytest.mark.parametrize('bad_id', [0, -3])
async def test_non_positive_id_fails_before_any_request(fake_onapp, bad_id):
    service = VirtualMachineActionsService(fake_onapp.client())

    with pytest.raises(OnAppArgumentError):
        await service.suspend(bad_id)

    assert fake_onapp.requests == []


@pytest.mark.asyncio
async def test_unknown_action_name_fails_before_any_request(fake_onapp):
    service = VirtualMachineActionsService(fake_onapp.client())

    with pytest.raises(OnAppArgumentError):
        await service.perform_action(42, 'explode')

    assert fake_onapp.requests == []


@pytest.mark.asyncio
async def test_failed_action_skips_transaction_lookup(fake_onapp):
    fake_onapp.reply(500, {'errors': ['Internal error']})
    service = VirtualMachineActionsService(fake_onapp.client())

    with pytest.raises(OnAppAPIError) as exc_info:
        await service.reboot(42)

    assert not isinstance(exc_info.value, TransactionLookupError)
    assert exc_info.value.status_code == 500
    assert len(fake_onapp.requests) == 1


@pytest.mark.asyncio
async def test_transport_failure_on_action_skips_lookup(fake_onapp):
    fake_onapp.fail(httpx.ConnectError('connection refused'))
    service = VirtualMachineActionsService(fake_onapp.client())

    with pytest.raises(OnAppTransportError):
        await service.reboot(42)

    assert len(fake_onapp.requests) == 1


@pytest.mark.asyncio
async def test_failed_lookup_reports_action_as_accepted(fake_onapp):
    fake_onapp.reply(200, {})
    fake_onapp.reply(503, text='Service Unavailable')
    service = VirtualMachineActionsService(fake_onapp.client())

    with pytest.raises(TransactionLookupError) as exc_info:
        await service.reboot(42)

    err = exc_info.value
    assert err.action_accepted is True
    assert err.resource_id == 42
    assert err.action == 'reboot'
    assert isinstance(err.__cause__, OnAppAPIError)
    assert err.__cause__.status_code == 503


@pytest.mark.asyncio
async def test_decoding_failure_on_lookup_reports_action_as_accepted(fake_onapp):
    fake_onapp.reply(200, {})
    fake_onapp.fail(httpx.DecodingError('bad gzip'))
    service = VirtualMachineActionsService(fake_onapp.client())

    with pytest.raises(TransactionLookupError) as exc_info:
        await service.startup(42)

    assert isinstance(exc_info.value.__cause__, OnAppTransportError)
    assert len(fake_onapp.requests) == 2
