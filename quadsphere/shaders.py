from OpenGL import GL

VERT_SRC = r"""
#version 120
attribute vec3 a_pos;
attribute vec3 a_normal;
attribute vec2 a_uv;
attribute vec4 a_tangent;

uniform mat4 u_mvp;

varying vec2 v_uv;
varying vec3 v_normal;
varying vec4 v_tangent;

void main() {
    v_uv = a_uv;
    v_normal = a_normal;
    v_tangent = a_tangent;
    gl_Position = u_mvp * vec4(a_pos, 1.0);
}
"""

FRAG_SRC = r"""
#version 120
uniform sampler2D u_base_color;  // albedo (equirect world map)
uniform sampler2D u_roughness;   // metallic-roughness: G = roughness, B = metallic
uniform sampler2D u_normal_map;  // tangent-space normals
uniform float u_perceptual_roughness;
uniform vec3 u_light_dir;        // world space, points from the surface toward the light

varying vec2 v_uv;
varying vec3 v_normal;
varying vec4 v_tangent;

void main() {
    vec3 n = normalize(v_normal);
    vec3 t = normalize(v_tangent.xyz - n * dot(n, v_tangent.xyz));
    vec3 b = cross(n, t) * v_tangent.w;
    vec3 nm = texture2D(u_normal_map, v_uv).rgb * 2.0 - 1.0;
    n = normalize(mat3(t, b, n) * nm);

    vec3 albedo = texture2D(u_base_color, v_uv).rgb;
    float rough = clamp(texture2D(u_roughness, v_uv).g * u_perceptual_roughness, 0.05, 1.0);

    // Mesh normals face the sphere centre, so light the flipped side.
    float diffuse = max(dot(-n, normalize(u_light_dir)), 0.0);
    float ambient = 0.08;
    float sheen = (1.0 - rough) * pow(diffuse, 8.0);

    gl_FragColor = vec4(albedo * (ambient + diffuse) + vec3(sheen), 1.0);
}
"""


def compile_shader(src: str, shader_type):
    sh = GL.glCreateShader(shader_type)
    GL.glShaderSource(sh, src)
    GL.glCompileShader(sh)
    ok = GL.glGetShaderiv(sh, GL.GL_COMPILE_STATUS)
    if not ok:
        log = GL.glGetShaderInfoLog(sh).decode("utf-8", "replace")
        raise RuntimeError(f"Shader compile failed:\n{log}")
    return sh


def link_program(vs, fs):
    prog = GL.glCreateProgram()
    GL.glAttachShader(prog, vs)
    GL.glAttachShader(prog, fs)
    GL.glLinkProgram(prog)
    ok = GL.glGetProgramiv(prog, GL.GL_LINK_STATUS)
    if not ok:
        log = GL.glGetProgramInfoLog(prog).decode("utf-8", "replace")
        raise RuntimeError(f"Program link failed:\n{log}")
    return prog
