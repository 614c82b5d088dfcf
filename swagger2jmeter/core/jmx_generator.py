"""JMX Generator for creating JMeter test plans from Swagger/OpenAPI endpoints.

This module provides the JMXGenerator class for serializing a load plan
configuration and a list of endpoint descriptors into a JMeter JMX file.
The output is a skeleton plan: samplers carry method and path only, no
request bodies or parameters are filled in.
"""

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Optional

from swagger2jmeter.core.base_url import (
    BASE_URL_PLACEHOLDER,
    PORT_PLACEHOLDER,
    PROTOCOL_PLACEHOLDER,
    SERVER_NAME_PLACEHOLDER,
    split_base_url,
)
from swagger2jmeter.core.data_structures import (
    EndpointDescriptor,
    HeaderEntry,
    LoadPlanConfig,
)
from swagger2jmeter.exceptions import JMXGenerationException

logger = logging.getLogger(__name__)

# Version markers of the JMX format, read by JMeter on load
JMX_VERSION = "1.2"
JMX_PROPERTIES = "5.0"
JMX_JMETER_VERSION = "5.6.3"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# Characters XML 1.0 cannot carry, even as character references
INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

# Columns recorded by the View Results Tree listener
SAVE_CONFIG_ITEMS = {
    "time": "true",
    "latency": "true",
    "timestamp": "true",
    "success": "true",
    "label": "true",
    "code": "true",
    "message": "true",
    "threadName": "true",
    "dataType": "true",
    "encoding": "true",
    "assertions": "true",
    "subresults": "true",
    "responseData": "false",
    "samplerData": "false",
    "xml": "true",
    "fieldNames": "true",
    "responseHeaders": "false",
    "requestHeaders": "false",
    "responseDataOnError": "false",
    "saveAssertionResultsFailureMessage": "true",
    "assertionsResultsToSave": "0",
    "bytes": "true",
    "sentBytes": "true",
    "url": "true",
    "threadCounts": "true",
    "idleTime": "true",
    "connectTime": "true",
}


def suggest_filename(title: Optional[str]) -> str:
    """Suggest a JMX file name for a plan title.

    Runs of whitespace are collapsed into a single underscore.

    Args:
        title: Test plan title

    Returns:
        File name ending in ".jmx"

    Example:
        >>> suggest_filename("Generated Test Plan")
        'Generated_Test_Plan.jmx'
    """
    stem = re.sub(r"\s+", "_", title or "")
    return f"{stem}.jmx"


class JMXGenerator:
    """Serializes load plans into JMeter JMX documents.

    The plan has the following structure:
    - Test Plan with user defined variables BASE_URL, PROTOCOL, SERVER_NAME, PORT
    - Thread Group (scheduler on, loops forever for the configured duration)
    - One HTTP Sampler per endpoint, pointing at ${PROTOCOL}://${SERVER_NAME}:${PORT}
    - One HTTP Header Manager under each sampler with the common headers
    - One View Results Tree listener after the samplers

    Every element is followed by a hashTree holding its children, as the
    JMX format requires. Samplers reference the server variables rather than
    literal values, so the same file can target another environment by
    overriding PROTOCOL, SERVER_NAME and PORT at run time.
    """

    def serialize(self, config: LoadPlanConfig, endpoints: list[EndpointDescriptor]) -> str:
        """Serialize a load plan into JMX text.

        Callers must pass at least one endpoint; an empty selection is
        rejected before this method is called.

        Args:
            config: Load plan settings
            endpoints: Endpoints to create samplers for, in order

        Returns:
            Pretty-printed JMX document with XML declaration
        """
        base_url = xml_safe(config.base_url) if config.base_url else BASE_URL_PLACEHOLDER
        resolved = split_base_url(base_url)
        logger.debug(
            "Serializing %d endpoint(s) against %s://%s:%s",
            len(endpoints),
            resolved.protocol,
            resolved.host,
            resolved.port,
        )

        jmeter_test_plan = ET.Element(
            "jmeterTestPlan",
            {"version": JMX_VERSION, "properties": JMX_PROPERTIES, "jmeter": JMX_JMETER_VERSION},
        )
        main_hashtree = ET.SubElement(jmeter_test_plan, "hashTree")

        variables = {
            "BASE_URL": base_url,
            "PROTOCOL": resolved.protocol,
            "SERVER_NAME": resolved.host,
            "PORT": resolved.port,
        }
        title = xml_safe(config.title or "Test Plan")
        main_hashtree.append(self._create_test_plan(title, variables))
        test_plan_hashtree = ET.SubElement(main_hashtree, "hashTree")

        test_plan_hashtree.append(
            self._create_thread_group(config.threads, config.ramp_time, config.duration)
        )
        thread_group_hashtree = ET.SubElement(test_plan_hashtree, "hashTree")

        for endpoint in endpoints:
            thread_group_hashtree.append(self._create_http_sampler(endpoint))
            sampler_hashtree = ET.SubElement(thread_group_hashtree, "hashTree")

            sampler_hashtree.append(self._create_header_manager(config.common_headers))
            # HeaderManager hashTree (empty)
            ET.SubElement(sampler_hashtree, "hashTree")

        thread_group_hashtree.append(self._create_view_results_tree_listener())
        ET.SubElement(thread_group_hashtree, "hashTree")

        return self._prettify_xml(jmeter_test_plan)

    def write(
        self,
        config: LoadPlanConfig,
        endpoints: list[EndpointDescriptor],
        output_path: str,
    ) -> dict[str, Any]:
        """Serialize a load plan and write it to disk.

        Args:
            config: Load plan settings
            endpoints: Endpoints to create samplers for
            output_path: Path where to save the JMX file

        Returns:
            Dictionary with generation results:
            {
                "success": bool,
                "jmx_path": str,
                "samplers_created": int,
                "headers_added": int,
                "threads": int,
                "ramp_time": int,
                "duration": int,
                "summary": str
            }

        Raises:
            JMXGenerationException: If the file cannot be written
        """
        xml_string = self.serialize(config, endpoints)

        output_file = Path(output_path)
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_text(xml_string, encoding="utf-8")
        except OSError as e:
            raise JMXGenerationException(f"Failed to write JMX file '{output_path}': {e}") from e

        headers_added = len(_active_headers(config.common_headers))
        summary = (
            f"Generated JMX test plan with {len(endpoints)} HTTP samplers "
            f"and {headers_added} common header(s). "
            f"Load profile: {config.threads} threads, {config.ramp_time}s ramp-up, "
            f"{config.duration}s duration."
        )

        return {
            "success": True,
            "jmx_path": str(output_file.absolute()),
            "samplers_created": len(endpoints),
            "headers_added": headers_added,
            "threads": config.threads,
            "ramp_time": config.ramp_time,
            "duration": config.duration,
            "summary": summary,
        }

    def _prettify_xml(self, elem: ET.Element) -> str:
        """Convert XML Element to pretty-printed string with 2-space indentation.

        Indentation is applied in place, so attribute values keep their
        newlines and tabs as character references.

        Args:
            elem: XML Element to prettify

        Returns:
            Pretty-printed XML string with a UTF-8 declaration
        """
        ET.indent(elem, space="  ")
        return f"{XML_DECLARATION}\n{ET.tostring(elem, encoding='unicode')}"

    def _create_test_plan(self, title: str, variables: dict[str, str]) -> ET.Element:
        """Create JMeter Test Plan element.

        Args:
            title: Test plan name
            variables: User defined variables, in declaration order

        Returns:
            TestPlan XML Element
        """
        test_plan = ET.Element(
            "TestPlan",
            {
                "guiclass": "TestPlanGui",
                "testclass": "TestPlan",
                "testname": title,
                "enabled": "true",
            },
        )

        ET.SubElement(test_plan, "stringProp", {"name": "TestPlan.comments"}).text = ""
        ET.SubElement(test_plan, "boolProp", {"name": "TestPlan.functional_mode"}).text = "false"
        ET.SubElement(
            test_plan, "boolProp", {"name": "TestPlan.tearDown_on_shutdown"}
        ).text = "true"
        ET.SubElement(
            test_plan, "boolProp", {"name": "TestPlan.serialize_threadgroups"}
        ).text = "false"

        elem_prop = ET.SubElement(
            test_plan,
            "elementProp",
            {"name": "TestPlan.user_defined_variables", "elementType": "Arguments"},
        )
        coll_prop = ET.SubElement(elem_prop, "collectionProp", {"name": "Arguments.arguments"})

        for name, value in variables.items():
            arg_elem = ET.SubElement(
                coll_prop, "elementProp", {"name": name, "elementType": "Argument"}
            )
            ET.SubElement(arg_elem, "stringProp", {"name": "Argument.name"}).text = name
            ET.SubElement(arg_elem, "stringProp", {"name": "Argument.value"}).text = xml_safe(value)
            ET.SubElement(arg_elem, "stringProp", {"name": "Argument.metadata"}).text = "="

        ET.SubElement(test_plan, "stringProp", {"name": "TestPlan.user_define_classpath"}).text = ""

        return test_plan

    def _create_thread_group(self, threads: int, ramp_time: int, duration: int) -> ET.Element:
        """Create JMeter Thread Group element.

        The scheduler is always on and the loop controller loops forever,
        so the run length is governed by the duration alone.

        Args:
            threads: Number of virtual users
            ramp_time: Ramp-up period in seconds
            duration: Test duration in seconds

        Returns:
            ThreadGroup XML Element
        """
        thread_group = ET.Element(
            "ThreadGroup",
            {
                "guiclass": "ThreadGroupGui",
                "testclass": "ThreadGroup",
                "enabled": "true",
                "testname": "Thread Group",
            },
        )

        ET.SubElement(
            thread_group, "stringProp", {"name": "ThreadGroup.on_sample_error"}
        ).text = "continue"

        loop_controller = ET.SubElement(
            thread_group,
            "elementProp",
            {"name": "ThreadGroup.main_controller", "elementType": "LoopController"},
        )
        ET.SubElement(
            loop_controller, "boolProp", {"name": "LoopController.continue_forever"}
        ).text = "false"
        # -1 loops forever, duration limits execution
        ET.SubElement(loop_controller, "stringProp", {"name": "LoopController.loops"}).text = "-1"

        ET.SubElement(thread_group, "stringProp", {"name": "ThreadGroup.num_threads"}).text = str(
            threads
        )
        ET.SubElement(thread_group, "stringProp", {"name": "ThreadGroup.ramp_time"}).text = str(
            ramp_time
        )
        ET.SubElement(thread_group, "boolProp", {"name": "ThreadGroup.scheduler"}).text = "true"
        ET.SubElement(thread_group, "stringProp", {"name": "ThreadGroup.duration"}).text = str(
            duration
        )
        ET.SubElement(thread_group, "stringProp", {"name": "ThreadGroup.delay"}).text = ""

        return thread_group

    def _create_http_sampler(self, endpoint: EndpointDescriptor) -> ET.Element:
        """Create HTTP Sampler for a single endpoint.

        The path is written as found in the document, {param} placeholders
        included. No body is attached.

        Args:
            endpoint: Endpoint descriptor

        Returns:
            HTTPSamplerProxy XML Element
        """
        sampler = ET.Element(
            "HTTPSamplerProxy",
            {
                "guiclass": "HttpTestSampleGui",
                "testclass": "HTTPSamplerProxy",
                "testname": xml_safe(endpoint.display_name),
                "enabled": "true",
            },
        )

        ET.SubElement(sampler, "boolProp", {"name": "HTTPSampler.postBodyRaw"}).text = "true"

        elem_prop = ET.SubElement(
            sampler,
            "elementProp",
            {"name": "HTTPsampler.Arguments", "elementType": "Arguments"},
        )
        ET.SubElement(elem_prop, "collectionProp", {"name": "Arguments.arguments"})

        ET.SubElement(
            sampler, "stringProp", {"name": "HTTPSampler.domain"}
        ).text = SERVER_NAME_PLACEHOLDER
        ET.SubElement(sampler, "stringProp", {"name": "HTTPSampler.port"}).text = PORT_PLACEHOLDER
        ET.SubElement(
            sampler, "stringProp", {"name": "HTTPSampler.protocol"}
        ).text = PROTOCOL_PLACEHOLDER
        ET.SubElement(sampler, "stringProp", {"name": "HTTPSampler.path"}).text = xml_safe(
            endpoint.path
        )
        ET.SubElement(sampler, "stringProp", {"name": "HTTPSampler.method"}).text = xml_safe(
            endpoint.method
        )

        ET.SubElement(sampler, "boolProp", {"name": "HTTPSampler.follow_redirects"}).text = "true"
        # Auto redirects off since follow_redirects is on
        ET.SubElement(sampler, "boolProp", {"name": "HTTPSampler.auto_redirects"}).text = "false"
        ET.SubElement(sampler, "boolProp", {"name": "HTTPSampler.use_keepalive"}).text = "true"
        ET.SubElement(
            sampler, "boolProp", {"name": "HTTPSampler.DO_MULTIPART_POST"}
        ).text = "false"

        return sampler

    def _create_header_manager(self, headers: list[HeaderEntry]) -> ET.Element:
        """Create HTTP Header Manager with the common headers.

        Headers whose key is blank are skipped; order is preserved.

        Args:
            headers: Common header entries

        Returns:
            HeaderManager XML Element (possibly with no headers)
        """
        header_manager = ET.Element(
            "HeaderManager",
            {
                "guiclass": "HeaderPanel",
                "testclass": "HeaderManager",
                "testname": "HTTP Header Manager",
                "enabled": "true",
            },
        )

        coll_prop = ET.SubElement(header_manager, "collectionProp", {"name": "HeaderManager.headers"})

        for header in _active_headers(headers):
            value = "" if header.value is None else xml_safe(header.value)
            key = xml_safe(header.key)
            elem_prop = ET.SubElement(
                coll_prop, "elementProp", {"name": key, "elementType": "Header"}
            )
            ET.SubElement(elem_prop, "stringProp", {"name": "Header.name"}).text = key
            ET.SubElement(elem_prop, "stringProp", {"name": "Header.value"}).text = value

        return header_manager

    def _create_view_results_tree_listener(self) -> ET.Element:
        """Create View Results Tree listener for detailed request/response viewing.

        Returns:
            ResultCollector XML Element configured as View Results Tree
        """
        listener = ET.Element(
            "ResultCollector",
            {
                "guiclass": "ViewResultsFullVisualizer",
                "testclass": "ResultCollector",
                "testname": "View Results Tree",
                "enabled": "true",
            },
        )

        ET.SubElement(listener, "boolProp", {"name": "ResultCollector.error_logging"}).text = (
            "false"
        )

        obj_prop = ET.SubElement(listener, "objProp")
        ET.SubElement(obj_prop, "name").text = "saveConfig"
        value_elem = ET.SubElement(obj_prop, "value", {"class": "SampleSaveConfiguration"})
        for key, val in SAVE_CONFIG_ITEMS.items():
            ET.SubElement(value_elem, key).text = val

        # No results file, output is shown in the GUI
        ET.SubElement(listener, "stringProp", {"name": "filename"}).text = ""

        return listener


def xml_safe(value: Any) -> str:
    """Stringify a value and drop characters XML 1.0 cannot represent.

    Example:
        >>> xml_safe("/a\\x01b")
        '/ab'
    """
    return INVALID_XML_CHARS.sub("", str(value))


def _active_headers(headers: list[HeaderEntry]) -> list[HeaderEntry]:
    """Return the headers whose key is not blank, in order."""
    active = []
    for header in headers or []:
        if header is None or not xml_safe(header.key or "").strip():
            logger.debug("Skipping header with blank name")
            continue
        active.append(header)
    return active
