"""
SuperCollider source templates.

Filled with str.format; literal braces in sclang code are doubled.
"""

# \sine synth, emitted once at the top of every arrangement.
# Based on: https://www.youtube.com/watch?v=nB_bVJ1c1Rg
INSTRUMENTS = """(
SynthDef.new(\\sine, {
    arg freq=440, atk=0.005, rel=0.3, amp=1, pan=0;
    var sig, env;
    sig = SinOsc.ar(freq);
    env = EnvGen.kr(Env.new([0, 1, 0], [atk, rel], [1, -1]), doneAction:2);
    sig = Pan2.ar(sig, pan, amp);
    sig = sig * env;
    Out.ar(0, sig);
}).add;
)
"""

INSTRUMENT_CLIP_TEMPLATE = """{var_name} = Pbind(
    \\instrument, \\{instrument_name},
    \\dur, Pseq({dur}),
    \\midinote, Pseq({midi_notes}),
);
"""

AUDIO_FILE_TEMPLATE = """// unimplemented: audio file playback is a placeholder
{var_name} = {{PlayBuf.ar(2, Buffer.read(s, "{filepath}"))}};
"""

EMPTY_CLIP_TEMPLATE = """{var_name} = (note:Rest(), dur:{dur});
"""

TRACK_TEMPLATE = """{track_name} = Pseq({clips}).do({{arg currClip; currClip.play}});
"""

ARRANGEMENT_TEMPLATE = """{instruments}
(
{variable_declarations}
{clip_declarations}
{track_declarations}
{track_names}.do({{arg currTrack; currTrack.play}})
)"""

# Stands in for a note group at a rest position
REST_MARKER = "note:Rest()"
