"""HTML documents served by the API."""

import json
from html import escape

from learnify.domain.subjects import EXAMPLE_QUESTIONS, SUBJECTS, formula_hint


def render_ask_page(answer: str | None) -> str:
    """Render the single-question chat page with an optional answer."""
    answer_html = ""
    if answer:
        answer_html = escape(answer).replace("\n", "<br>\n")
    return _ASK_HTML.replace("{{ANSWER}}", answer_html)


def render_wizard_page() -> str:
    """Render the question wizard document."""
    subject_cards = "\n".join(
        f'<div class="card subject-card" data-subject="{escape(subject)}">'
        f"{escape(subject)}</div>"
        for subject in SUBJECTS
    )
    hints = {subject: formula_hint(subject) for subject in SUBJECTS}
    return (
        _WIZARD_HTML.replace("{{SUBJECT_CARDS}}", subject_cards)
        .replace("{{EXAMPLES}}", _script_json(EXAMPLE_QUESTIONS))
        .replace("{{FORMULAS}}", _script_json(hints))
    )


def _script_json(value: dict[str, str]) -> str:
    return json.dumps(value).replace("</", "<\\/")


_ASK_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Learnify - Ask</title>
    <style>
      body { font-family: Arial, sans-serif; background: #203a43; color: white;
             text-align: center; padding: 20px; }
      input, button { font-size: 16px; padding: 12px; margin: 10px;
                      border-radius: 6px; border: none; }
      input { width: 80%; max-width: 500px; }
      button { background-color: #00bcd4; color: white; cursor: pointer; }
      #answer { margin: 20px auto; padding: 20px; background: #1e1e1e;
                border-radius: 10px; max-width: 600px; white-space: pre-wrap; }
    </style>
  </head>
  <body>
    <h1>Learnify Ask</h1>
    <form method="POST" action="/ask">
      <input type="text" name="question" placeholder="Type your question..." required />
      <br />
      <button type="submit">Get Answer</button>
    </form>
    <div id="answer">{{ANSWER}}</div>
  </body>
</html>
"""

_WIZARD_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Learnify Pro - AI Homework Helper</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 0;
             background: #f3f4f6; color: #1f2937; }
      main { max-width: 56rem; margin: 2rem auto; padding: 0 1rem; }
      .page { display: none; }
      .grid { display: grid; grid-template-columns: repeat(3, 1fr); gap: 0.75rem; }
      .card { background: white; border-radius: 1rem; padding: 1rem; cursor: pointer;
              box-shadow: 0 4px 6px rgba(0, 0, 0, 0.05); text-align: center; }
      .active-selection { box-shadow: 0 0 0 2px #7c3aed; }
      .chip { margin: 0.2rem; padding: 0.3rem 0.8rem; border-radius: 999px;
              border: none; background: #e5e7eb; }
      button.primary { background: #7c3aed; color: white; border: none;
                       border-radius: 999px; padding: 0.5rem 1.5rem; margin-top: 1rem; }
      button:disabled { opacity: 0.6; cursor: not-allowed; }
      .hidden { display: none; }
      textarea { width: 100%; height: 10rem; }
      .tabs button { margin-right: 0.5rem; }
      #toast { position: fixed; bottom: 1rem; left: 50%; transform: translateX(-50%);
               padding: 0.5rem 1rem; border-radius: 0.5rem; background: #1f2937;
               color: white; }
      #toast.error { background: #ef4444; }
      #helper { position: fixed; bottom: 1rem; right: 1rem; width: 18rem; }
    </style>
  </head>
  <body>
    <main>
      <section id="welcome-page" class="page">
        <h1>Learnify Pro</h1>
        <p>Get instant solutions, explanations, and learning resources</p>
        <button id="get-started-btn" class="primary">Get Started</button>
      </section>

      <section id="subject-page" class="page">
        <h2>Choose your Subject</h2>
        <div class="grid">{{SUBJECT_CARDS}}</div>
        <h3>Select Your Class</h3>
        <div id="class-chips"></div>
        <button id="continue-btn" class="primary" disabled>Continue</button>
      </section>

      <section id="method-page" class="page">
        <button id="back-btn">Back</button>
        <h2>How to Solve?</h2>
        <p id="selection-display"></p>
        <div class="grid">
          <div class="card method-card" data-method="text">Text Input</div>
          <div class="card method-card" data-method="image">Image Upload</div>
          <div class="card method-card" data-method="voice">Voice Question</div>
        </div>
        <button id="start-btn" class="primary" disabled>Select a Method</button>
      </section>

      <section id="question-page" class="page">
        <button id="back-to-method-btn">Back</button>
        <h2>Ask Your Question</h2>
        <div id="text-input" class="hidden">
          <textarea id="question-text" placeholder="Type your question here..."></textarea>
          <button id="clear-text-btn">Clear</button>
          <p>
            <input id="equation-input" placeholder="e.g. x^2 + 2x + 1 = 0" />
            <button id="insert-equation-btn">Insert Equation</button>
          </p>
        </div>
        <div id="image-input" class="hidden">
          <input type="file" id="image-upload" accept="image/*" />
          <button id="remove-image-btn">Remove</button>
          <p id="image-name"></p>
        </div>
        <div id="voice-input" class="hidden">
          <button id="record-btn">Start Recording</button>
          <p id="transcript"></p>
        </div>
        <button id="show-example-btn">Show Example</button>
        <button id="show-formula-btn">Show Formula</button>
        <button id="submit-btn" class="primary" disabled>Submit Question</button>
      </section>

      <section id="results-page" class="page">
        <h2>Solution</h2>
        <p id="question-display"></p>
        <div id="loading">Solving...</div>
        <div id="results" class="hidden">
          <div class="tabs">
            <button data-tab="solution">Solution</button>
            <button data-tab="explanation">Explanation</button>
            <button data-tab="resources">Resources</button>
          </div>
          <div id="solution-tab" class="tab"></div>
          <div id="explanation-tab" class="tab hidden"></div>
          <div id="resources-tab" class="tab hidden"></div>
          <p>
            <button class="feedback-btn" data-feedback="helpful">Helpful</button>
            <button class="feedback-btn" data-feedback="not-helpful">Not helpful</button>
          </p>
          <button id="new-question-btn" class="primary">New Question</button>
        </div>
      </section>
    </main>

    <div id="helper" class="card">
      <div id="helper-messages">How can I help with your homework today?</div>
      <input id="helper-input" placeholder="Ask me anything..." />
      <button id="helper-send">Send</button>
    </div>
    <div id="toast" class="hidden"></div>

    <script>
      const MAX_IMAGE_BYTES = 5 * 1024 * 1024;
      const RECORDING_LIMIT_MS = 60 * 1000;
      const EXAMPLES = {{EXAMPLES}};
      const FORMULAS = {{FORMULAS}};
      const state = {
        sessionId: null, subject: null, classLevel: null, method: null,
        image: null, audioChunks: [], recorder: null, currentQuestion: null,
      };
      const $ = (id) => document.getElementById(id);

      function toast(message, type) {
        const el = $('toast');
        el.textContent = message;
        el.className = type === 'error' ? 'error' : '';
        setTimeout(() => el.classList.add('hidden'), 3000);
      }

      function showPage(name) {
        document.querySelectorAll('.page').forEach((p) => (p.style.display = 'none'));
        $(name + '-page').style.display = 'block';
      }

      function submissionError() {
        if (state.method === 'text' && !$('question-text').value.trim()) return 'Please enter your question';
        if (state.method === 'image' && !state.image) return 'Please upload an image';
        if (state.method === 'voice' && !$('transcript').textContent.trim()) return 'Please record your question';
        return null;
      }

      function updateButtons() {
        $('continue-btn').disabled = !(state.subject && state.classLevel);
        $('start-btn').disabled = !state.method;
        $('start-btn').textContent = state.method ? 'Start with ' + state.method : 'Select a Method';
        $('submit-btn').disabled = submissionError() !== null;
      }

      function select(selector, target) {
        document.querySelectorAll(selector).forEach((el) => el.classList.remove('active-selection'));
        target.classList.add('active-selection');
      }

      function escapeHtml(text) {
        return String(text).replace(/&/g, '&amp;').replace(/</g, '&lt;')
          .replace(/>/g, '&gt;').replace(/"/g, '&quot;');
      }

      function insertEquation() {
        const equation = $('equation-input').value.trim();
        if (!equation) return;
        const textarea = $('question-text');
        const position = textarea.selectionStart;
        const text = textarea.value;
        textarea.value = text.substring(0, position) + ' ' + equation + ' ' + text.substring(position);
        $('equation-input').value = '';
        textarea.focus();
        updateButtons();
      }

      function localSolution(question) {
        return {
          solution: '<p>' + escapeHtml(question) + '</p><p>Comprehensive solution for this ' + escapeHtml(state.subject) + ' question.</p>',
          explanation: 'Detailed explanation of the concepts involved in this question.',
          resources: [state.subject + ' Textbook Reference', 'Online Learning Resources', 'Educational Videos'],
        };
      }

      function showTab(name) {
        document.querySelectorAll('.tab').forEach((t) => t.classList.add('hidden'));
        $(name + '-tab').classList.remove('hidden');
      }

      function displaySolution(data) {
        $('solution-tab').innerHTML = data.solution || '';
        $('explanation-tab').textContent = data.explanation || '';
        $('resources-tab').replaceChildren(...(data.resources || []).map((r) => {
          const item = document.createElement('div');
          item.className = 'card';
          item.textContent = r;
          return item;
        }));
        $('loading').classList.add('hidden');
        $('results').classList.remove('hidden');
        showTab('solution');
      }

      async function submit() {
        const error = submissionError();
        if (error) { toast(error, 'error'); return; }
        if (state.method === 'text') state.currentQuestion = $('question-text').value.trim();
        if (state.method === 'image') state.currentQuestion = 'Image question: ' + state.image.name;
        if (state.method === 'voice') state.currentQuestion = $('transcript').textContent.trim();
        $('question-display').textContent = state.currentQuestion;
        $('loading').classList.remove('hidden');
        $('results').classList.add('hidden');
        showPage('results');
        try {
          let response;
          if (state.method === 'text') {
            response = await fetch('/api/solve/text', {
              method: 'POST',
              headers: { 'Content-Type': 'application/json' },
              body: JSON.stringify({ question: state.currentQuestion, subject: state.subject,
                                     classLevel: state.classLevel, sessionId: state.sessionId }),
            });
          } else {
            const form = new FormData();
            if (state.method === 'image') form.append('image', state.image);
            else form.append('audio', new Blob(state.audioChunks, { type: 'audio/wav' }), 'recording.wav');
            form.append('subject', state.subject);
            form.append('classLevel', state.classLevel);
            form.append('sessionId', state.sessionId);
            response = await fetch('/api/solve/' + state.method, { method: 'POST', body: form });
          }
          if (!response.ok) throw new Error('API request failed');
          displaySolution(await response.json());
        } catch (err) {
          console.error('Error processing question:', err);
          toast('Error processing your question. Please try again.', 'error');
          displaySolution(localSolution(state.currentQuestion));
        }
      }

      async function toggleRecording() {
        if (state.recorder) {
          state.recorder.stop();
          state.recorder.stream.getTracks().forEach((t) => t.stop());
          state.recorder = null;
          $('record-btn').textContent = 'Start Recording';
          return;
        }
        try {
          const stream = await navigator.mediaDevices.getUserMedia({ audio: true });
          const recorder = new MediaRecorder(stream);
          state.audioChunks = [];
          recorder.ondataavailable = (e) => state.audioChunks.push(e.data);
          recorder.onstop = () => {
            $('transcript').textContent = EXAMPLES[state.subject] || 'This is a simulated voice question about ' + state.subject;
            updateButtons();
          };
          recorder.start();
          state.recorder = recorder;
          $('record-btn').textContent = 'Stop';
          setTimeout(() => { if (state.recorder === recorder) toggleRecording(); }, RECORDING_LIMIT_MS);
        } catch (err) {
          toast('Could not access microphone. Please check permissions.', 'error');
        }
      }

      async function askHelper() {
        const query = $('helper-input').value;
        try {
          const res = await fetch('/api/helper', {
            method: 'POST', headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify({ query }),
          });
          const data = await res.json();
          if (!res.ok) { toast(data.error, 'error'); return; }
          $('helper-messages').textContent = data.reply;
          $('helper-input').value = '';
        } catch (err) {
          toast('Helper is unavailable right now.', 'error');
        }
      }

      async function initialize() {
        try {
          const res = await fetch('/api/sessions', { method: 'POST' });
          if (!res.ok) throw new Error('Session request failed with ' + res.status);
          const data = await res.json();
          if (!data.sessionId) throw new Error('Session response had no sessionId');
          state.sessionId = data.sessionId;
        } catch (err) {
          console.error('Failed to create session:', err);
          state.sessionId = 'session-' + Math.random().toString(36).substring(2, 15);
        }
        for (let i = 1; i <= 12; i++) {
          const chip = document.createElement('button');
          chip.className = 'chip';
          chip.textContent = i;
          chip.addEventListener('click', () => { state.classLevel = i; select('.chip', chip); updateButtons(); });
          $('class-chips').appendChild(chip);
        }
        document.querySelectorAll('.subject-card').forEach((card) => card.addEventListener('click', () => {
          state.subject = card.dataset.subject; select('.subject-card', card); updateButtons();
        }));
        document.querySelectorAll('.method-card').forEach((card) => card.addEventListener('click', () => {
          state.method = card.dataset.method; select('.method-card', card); updateButtons();
        }));
        document.querySelectorAll('.tabs button').forEach((b) => b.addEventListener('click', () => showTab(b.dataset.tab)));
        document.querySelectorAll('.feedback-btn').forEach((b) => b.addEventListener('click', () => {
          toast(b.dataset.feedback === 'helpful' ? 'Thanks for your feedback!' : "We'll try to improve!");
        }));
        $('get-started-btn').addEventListener('click', () => showPage('subject'));
        $('continue-btn').addEventListener('click', () => {
          if (!(state.subject && state.classLevel)) return;
          $('selection-display').textContent = 'Class ' + state.classLevel + ' - ' + state.subject;
          showPage('method');
        });
        $('back-btn').addEventListener('click', () => showPage('subject'));
        $('back-to-method-btn').addEventListener('click', () => showPage('method'));
        $('start-btn').addEventListener('click', () => {
          if (!state.method) return;
          ['text', 'image', 'voice'].forEach((m) => $(m + '-input').classList.toggle('hidden', m !== state.method));
          showPage('question');
          updateButtons();
        });
        $('question-text').addEventListener('input', updateButtons);
        $('clear-text-btn').addEventListener('click', () => { $('question-text').value = ''; updateButtons(); });
        $('image-upload').addEventListener('change', (e) => {
          const file = e.target.files[0];
          if (!file) return;
          if (file.size > MAX_IMAGE_BYTES) { toast('Please upload images smaller than 5MB', 'error'); return; }
          if (!file.type.startsWith('image/')) { toast('Please upload a valid image file', 'error'); return; }
          state.image = file;
          $('image-name').textContent = file.name;
          updateButtons();
        });
        $('remove-image-btn').addEventListener('click', () => {
          $('image-upload').value = ''; state.image = null; $('image-name').textContent = ''; updateButtons();
        });
        $('record-btn').addEventListener('click', toggleRecording);
        $('show-example-btn').addEventListener('click', () => {
          const example = EXAMPLES[state.subject] || 'Example question about ' + state.subject;
          if (state.method === 'text') $('question-text').value = example;
          if (state.method === 'voice') $('transcript').textContent = example;
          updateButtons();
        });
        $('insert-equation-btn').addEventListener('click', insertEquation);
        $('show-formula-btn').addEventListener('click', () => {
          toast(FORMULAS[state.subject] || 'No specific formula for ' + state.subject + '. Check the examples for guidance.');
        });
        $('submit-btn').addEventListener('click', submit);
        $('new-question-btn').addEventListener('click', () => {
          $('question-text').value = '';
          $('image-upload').value = '';
          $('image-name').textContent = '';
          $('transcript').textContent = '';
          state.image = null;
          state.audioChunks = [];
          state.currentQuestion = null;
          showPage('method');
          updateButtons();
        });
        $('helper-send').addEventListener('click', askHelper);
        showPage('welcome');
        updateButtons();
      }

      document.addEventListener('DOMContentLoaded', initialize);
    </script>
  </body>
</html>
"""
