# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for adapters (from_source, send, export) and network transport."""

import dns.exception
import dns.resolver
import pytest
import requests

from genro_formtree import (
    FormStore,
    FormValue,
    ShapeError,
    export,
    from_source,
    send,
)
from genro_formtree import transport
from genro_formtree.constants import DEFAULT_SEND_TIMEOUT


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeSession:
    """Records post() calls and answers with a fixed body."""

    def __init__(self, body='ok'):
        self.body = body
        self.calls = []

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls.append({'url': url, 'data': data, 'headers': headers, 'timeout': timeout})
        return FakeResponse(self.body)


class TestFromSource:
    """Tests for building trees from a data source."""

    def test_mapping(self):
        """Test a plain mapping source."""
        form = from_source({'a': ' 1 ', 'b': {'c': '2'}})
        assert isinstance(form, FormStore)
        assert form.as_array() == {'a': '1', 'b': {'c': '2'}}

    def test_callable(self):
        """Test a callable source is called once."""
        calls = []

        def source():
            calls.append(1)
            return {'q': 'search'}

        form = from_source(source)
        assert form.as_array() == {'q': 'search'}
        assert calls == [1]

    def test_callable_returning_none(self):
        """Test a source with no data gives an empty store."""
        form = from_source(lambda: None)
        assert isinstance(form, FormStore)
        assert len(form) == 0

    def test_expected(self):
        """Test expected keys apply to the source data."""
        form = from_source({'a': '1', 'b': '2'}, expected={'a': '', 'page': '1'})
        assert form.as_array() == {'a': '1', 'page': '1'}

    def test_no_trim(self):
        """Test trim=False keeps the raw text."""
        form = from_source({'a': ' 1 '}, trim=False)
        assert form['a'].value == ' 1 '


class TestExport:
    """Tests for writing a tree back into a mapping."""

    def test_export_replaces_content(self):
        """Test the target is cleared and filled with as_array()."""
        target = {'old': 'x'}
        export(FormStore({'a': '1', 'b': {'c': '2'}}), target)
        assert target == {'a': '1', 'b': {'c': '2'}}

    def test_export_method(self):
        """Test FormNode.export()."""
        target = {}
        FormStore({'a': '1'}).export(target)
        assert target == {'a': '1'}

    def test_export_list_shaped(self):
        """Test a list-shaped store exports keyed by position."""
        target = {}
        export(FormStore(['a', 'b']), target)
        assert target == {'0': 'a', '1': 'b'}

    def test_export_leaf_raises(self):
        """Test a leaf cannot be exported to a mapping."""
        with pytest.raises(ShapeError):
            export(FormValue('x'), {})


class TestSend:
    """Tests for POSTing a tree as a form."""

    def test_send_with_session(self):
        """Test the body is the query string and the response text is returned."""
        session = FakeSession('accepted')
        form = FormStore({'name': 'Alice', 'tags': {'a': 'x y'}})
        assert form.send('http://example.com/submit', session=session) == 'accepted'

        call = session.calls[0]
        assert call['url'] == 'http://example.com/submit'
        assert call['data'] == form.as_query()
        assert call['headers'] == {'Content-Type': transport.FORM_CONTENT_TYPE}
        assert call['timeout'] == DEFAULT_SEND_TIMEOUT

    def test_send_timeout(self):
        """Test a custom timeout is passed through."""
        session = FakeSession()
        send(FormStore({'a': '1'}), 'http://example.com', timeout=2, session=session)
        assert session.calls[0]['timeout'] == 2

    def test_send_without_session(self, monkeypatch):
        """Test requests.post is used when no session is given."""
        calls = []

        def fake_post(url, **kwargs):
            calls.append((url, kwargs))
            return FakeResponse('done')

        monkeypatch.setattr(requests, 'post', fake_post)
        assert FormStore({'a': '1'}).send('http://example.com') == 'done'
        assert calls[0][1]['data'] == 'a=1'

    def test_send_empty_url(self):
        """Test an empty URL sends nothing."""
        session = FakeSession()
        assert FormStore({'a': '1'}).send('', session=session) is None
        assert session.calls == []

    def test_send_failure(self, monkeypatch):
        """Test transport errors give None."""
        def failing_post(url, **kwargs):
            raise requests.exceptions.ConnectionError("refused")

        monkeypatch.setattr(requests, 'post', failing_post)
        assert FormStore({'a': '1'}).send('http://example.com') is None

    def test_send_leaf(self):
        """Test a leaf sends its encoded text."""
        session = FakeSession()
        FormValue('a b').send('http://example.com', session=session)
        assert session.calls[0]['data'] == 'a+b'


class TestMxLookup:
    """Tests for has_mx_record."""

    def test_mx_found(self, monkeypatch):
        """Test a domain with MX records."""
        calls = []

        def fake_resolve(domain, rdtype, lifetime=None):
            calls.append((domain, rdtype, lifetime))
            return ['10 mail.example.com.']

        monkeypatch.setattr(dns.resolver, 'resolve', fake_resolve)
        assert transport.has_mx_record('example.com', timeout=1.5) is True
        assert calls == [('example.com', 'MX', 1.5)]

    def test_mx_lookup_failure(self, monkeypatch):
        """Test DNS errors give False."""
        def failing_resolve(domain, rdtype, lifetime=None):
            raise dns.exception.DNSException("no answer")

        monkeypatch.setattr(dns.resolver, 'resolve', failing_resolve)
        assert transport.has_mx_record('nowhere.test') is False
