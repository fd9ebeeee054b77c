"""
Canned profile used when a real one is missing or too shallow to be worth drawing.

The tree mirrors the hot paths of the bundled sample Go program. Weights are
fixed: the root and `main.main` both carry 2000 samples.
"""

from pprof_flame.frames import Frame, ProfileData, TopFunctionEntry

DEMO_SAMPLES = 2000


def _f(name, value, *children):
    return Frame(name, value, children)


def demo_tree() -> Frame:
    return _f("root", 2000, _f("main.main", 2000, _f(
        "main.runInefficiently", 2000,
        _f("main.inefficientSort", 280,
           _f("main.bubbleSort", 200, _f("runtime.memmove", 80)),
           _f("runtime.growslice", 60),
           _f("runtime.makeslice", 20)),
        _f("main.heavyComputation", 320,
           _f("main.fibonacci", 200,
              _f("main.fibonacci", 150, _f("main.fibonacci", 100))),
           _f("math.Pow", 60),
           _f("math.Sin", 30),
           _f("math.Cos", 30)),
        _f("main.dataProcessingPipeline", 400,
           _f("main.generateRecords", 100,
              _f("main.generateRandomString", 40),
              _f("main.generateMetadata", 30, _f("main.generateNestedValue", 20)),
              _f("fmt.Sprintf", 30)),
           _f("main.filterRecords", 80,
              _f("main.filterByValue", 30),
              _f("main.filterByTags", 30),
              _f("main.filterByTime", 20)),
           _f("main.transformRecords", 120,
              _f("main.transformSingleRecord", 100,
                 _f("main.calculateComplexValue", 50),
                 _f("main.normalizeString", 30),
                 _f("main.deduplicateTags", 20))),
           _f("main.enrichRecords", 60,
              _f("main.computeRecordHash", 25),
              _f("main.computeRecordScore", 20),
              _f("main.categorizeRecord", 15)),
           _f("main.aggregateRecords", 40,
              _f("main.aggregateStdDev", 20),
              _f("main.aggregateAvg", 10),
              _f("main.aggregateSum", 10))),
        _f("main.cryptoOperations", 180,
           _f("main.hashChain", 100,
              _f("crypto/sha256.(*digest).Write", 50),
              _f("crypto/md5.(*digest).Write", 30)),
           _f("main.hashWithSHA256", 50),
           _f("main.hashWithMD5", 30)),
        _f("main.jsonSerializationMess", 200,
           _f("encoding/json.Marshal", 90,
              _f("encoding/json.(*encodeState).marshal", 70)),
           _f("encoding/json.Unmarshal", 80,
              _f("encoding/json.(*decodeState).unmarshal", 60)),
           _f("main.createComplexObject", 30)),
        _f("main.regexAbuse", 150,
           _f("main.findEmails", 60,
              _f("regexp.MustCompile", 40),
              _f("regexp.(*Regexp).FindAllString", 20)),
           _f("main.findWords", 50, _f("regexp.MustCompile", 35)),
           _f("main.findNumbers", 40, _f("regexp.MustCompile", 25))),
        _f("main.concurrencyOverhead", 170,
           _f("main.mutexContention", 80,
              _f("sync.(*Mutex).Lock", 40),
              _f("sync.(*Mutex).Unlock", 20),
              _f("runtime.newproc", 20)),
           _f("runtime.newproc", 50),
           _f("runtime.chanrecv", 25),
           _f("runtime.chansend", 15)),
        _f("main.recursiveDataStructures", 160,
           _f("main.buildTree", 60,
              _f("main.buildTree", 40, _f("main.buildTree", 25))),
           _f("main.traverseTree", 40),
           _f("main.sumTree", 35),
           _f("main.findInTree", 25)),
        _f("main.memoryWaster", 100,
           _f("runtime.mallocgc", 60),
           _f("runtime.growslice", 25),
           _f("fmt.Sprintf", 15)),
        _f("main.stringConcatWaste", 40,
           _f("runtime.concatstrings", 25),
           _f("runtime.slicebytetostring", 15)),
    )))


_TOP_FUNCTIONS = (
    ("main.dataProcessingPipeline", 20.0, 400),
    ("main.heavyComputation", 16.0, 320),
    ("main.inefficientSort", 14.0, 280),
    ("main.jsonSerializationMess", 10.0, 200),
    ("main.fibonacci", 10.0, 200),
    ("main.cryptoOperations", 9.0, 180),
    ("main.concurrencyOverhead", 8.5, 170),
    ("main.recursiveDataStructures", 8.0, 160),
    ("main.regexAbuse", 7.5, 150),
    ("main.transformRecords", 6.0, 120),
)

_RAW_TEMPLATE = """\
# {kind} profile for {name}
# Duration: {duration}s
# Total samples: {samples}
#
# Hot paths identified:
# - main.dataProcessingPipeline (20%) - Deep call stacks with filtering/transforming
# - main.heavyComputation (16%) - Recursive fibonacci, math operations
# - main.inefficientSort (14%) - Bubble sort O(n^2)
# - main.jsonSerializationMess (10%) - Repeated marshal/unmarshal
# - main.cryptoOperations (9%) - Hash chain with MD5/SHA256
# - main.regexAbuse (7.5%) - Compiling regex in loops"""


def demo_top_functions():
    return [TopFunctionEntry(*row) for row in _TOP_FUNCTIONS]


def demo_profile(name: str, duration, kind: str = "cpu") -> ProfileData:
    """Build the fallback profile, labelled with the caller's app name, duration and kind."""
    return ProfileData(
        name=name,
        duration=duration,
        sample_count=DEMO_SAMPLES,
        top_functions=demo_top_functions(),
        flamegraph=demo_tree(),
        raw_profile=_RAW_TEMPLATE.format(
            kind=kind, name=name, duration=duration, samples=DEMO_SAMPLES
        ),
        kind=kind,
        demo=True,
    )
