# tests/test_params.py
"""Test request parameters and the request builder"""

from piano.protocol.params import (
    Parameter,
    ParamType,
    RpcRequest,
    url_escape,
    xml_escape,
)


class TestEscaping:
    """Test the two escape functions"""

    def test_xml_escape(self):
        """Test all five XML special characters"""
        assert xml_escape("a & b") == "a &amp; b"
        assert xml_escape("<tag>") == "&lt;tag&gt;"
        assert xml_escape("\"quoted\" 'single'") == "&quot;quoted&quot; &apos;single&apos;"
        assert xml_escape("plain") == "plain"

    def test_url_escape(self):
        """Test reserved characters and UTF-8 are percent-encoded"""
        assert url_escape("a b") == "a%20b"
        assert url_escape("a&b=c/d") == "a%26b%3Dc%2Fd"
        assert url_escape("ü") == "%C3%BC"
        assert url_escape("safe-_.~") == "safe-_.~"


class TestParameter:
    """Test a parameter's two renderings"""

    def test_string_renderings_agree(self):
        """The same string renders escaped for each destination"""
        param = Parameter.string("Tom & Jerry's <mix>")
        assert param.to_xml_escaped() == (
            "<value><string>Tom &amp; Jerry&apos;s &lt;mix&gt;</string></value>"
        )
        assert param.to_url_escaped() == "Tom%20%26%20Jerry%27s%20%3Cmix%3E"

    def test_integer(self):
        param = Parameter.integer(1215000000)
        assert param.type is ParamType.INT
        assert param.to_xml_escaped() == "<value><int>1215000000</int></value>"
        assert param.to_url_escaped() == "1215000000"

    def test_boolean(self):
        """Test booleans are 1/0 in XML and true/false in the URL"""
        assert Parameter.boolean(True).to_xml_escaped() == "<value><boolean>1</boolean></value>"
        assert Parameter.boolean(False).to_xml_escaped() == "<value><boolean>0</boolean></value>"
        assert Parameter.boolean(True).to_url_escaped() == "true"
        assert Parameter.boolean(False).to_url_escaped() == "false"

    def test_mirrored_by_default(self):
        assert Parameter.string("x").mirrored
        assert not Parameter.string("x", mirrored=False).mirrored


class TestRpcRequest:
    """Test query string construction"""

    def test_only_mirrored_params_become_args(self):
        """Test argN numbering skips body-only parameters"""
        request = RpcRequest("station.setStationName", "setStationName", [
            Parameter.integer(42, mirrored=False),
            Parameter.string("token", mirrored=False),
            Parameter.string("S1"),
            Parameter.string("New Name"),
        ])

        assert request.query_string("0123456P", "L42") == (
            "rid=0123456P&lid=L42&method=setStationName&arg1=S1&arg2=New%20Name"
        )

    def test_without_listener(self):
        request = RpcRequest("misc.sync", "sync", with_listener=False)
        assert request.query_string("0123456P", "L42") == "rid=0123456P&method=sync"

    def test_listener_missing_is_empty(self):
        """Test lid is still present, and empty, before authentication"""
        request = RpcRequest("station.getStations", "getStations")
        assert request.query_string("0123456P") == "rid=0123456P&lid=&method=getStations"

    def test_boolean_args(self):
        request = RpcRequest("station.addFeedback", "addFeedback", [
            Parameter.boolean(True),
            Parameter.boolean(False),
        ])
        assert request.query_string("R", "L").endswith("&arg1=true&arg2=false")

    def test_url(self):
        request = RpcRequest("music.search", "search", [Parameter.string("miles davis")])
        assert request.url("http://host/rpc", "R", "L") == (
            "http://host/rpc?rid=R&lid=L&method=search&arg1=miles%20davis"
        )

    def test_defaults(self):
        request = RpcRequest("station.getStations", "getStations")
        assert request.params == []
        assert not request.secure
        assert request.with_listener
